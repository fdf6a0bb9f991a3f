# src/floatmap/projection.py
"""Equirectangular projection onto the normalized 100 x 100 map surface.

Longitude -180..180 maps to x 0..100 left to right, latitude 90..-90 maps to
y 0..100 top to bottom.
"""
import logging
from typing import NamedTuple, Sequence, Tuple

import numpy as np

from .exceptions import ProjectionDomainError

logger = logging.getLogger(__name__)

SURFACE_SIZE = 100.0
LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)


class ProjectedPoint(NamedTuple):
    x: float
    y: float


def in_domain(latitude: float, longitude: float) -> bool:
    return LAT_RANGE[0] <= latitude <= LAT_RANGE[1] and LON_RANGE[0] <= longitude <= LON_RANGE[1]


def project(latitude: float, longitude: float, strict: bool = False) -> ProjectedPoint:
    """Project a geographic coordinate onto the map surface.

    Out-of-range coordinates are clamped to the domain edge, or rejected
    with ProjectionDomainError when ``strict`` is set.
    """
    if not in_domain(latitude, longitude):
        if strict:
            raise ProjectionDomainError(latitude, longitude)
        logger.debug(f"Clamping out-of-range coordinate ({latitude}, {longitude})")
        latitude = min(max(latitude, LAT_RANGE[0]), LAT_RANGE[1])
        longitude = min(max(longitude, LON_RANGE[0]), LON_RANGE[1])

    x = (longitude + 180.0) / 360.0 * SURFACE_SIZE
    y = (90.0 - latitude) / 180.0 * SURFACE_SIZE
    return ProjectedPoint(x, y)


def project_many(latitudes: Sequence[float], longitudes: Sequence[float],
                 strict: bool = False) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized ``project`` over coordinate arrays"""
    lat = np.asarray(latitudes, dtype=float)
    lon = np.asarray(longitudes, dtype=float)
    if lat.shape != lon.shape:
        raise ValueError(f"Shape mismatch: {lat.shape} vs {lon.shape}")

    outside = (lat < LAT_RANGE[0]) | (lat > LAT_RANGE[1]) | (lon < LON_RANGE[0]) | (lon > LON_RANGE[1])
    if outside.any():
        if strict:
            first = int(np.argmax(outside))
            raise ProjectionDomainError(float(lat.flat[first]), float(lon.flat[first]))
        logger.debug(f"Clamping {int(outside.sum())} out-of-range coordinates")
        lat = np.clip(lat, *LAT_RANGE)
        lon = np.clip(lon, *LON_RANGE)

    xs = (lon + 180.0) / 360.0 * SURFACE_SIZE
    ys = (90.0 - lat) / 180.0 * SURFACE_SIZE
    return xs, ys
