# tests/test_projection.py

import pytest
from pathlib import Path
import sys
import numpy as np

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from floatmap.projection import project, project_many, in_domain, ProjectedPoint
from floatmap.exceptions import ProjectionDomainError


class TestProjection:
    """Test cases for the equirectangular projection"""

    def test_boundary_values(self):
        assert project(90, -180) == ProjectedPoint(0.0, 0.0)
        assert project(-90, 180) == ProjectedPoint(100.0, 100.0)
        assert project(0, 0) == ProjectedPoint(50.0, 50.0)

    def test_reference_example(self):
        """Float at lat=-20, lng=60"""
        point = project(-20, 60)
        assert point.x == pytest.approx(66.67, abs=0.01)
        assert point.y == pytest.approx(61.11, abs=0.01)

    def test_determinism(self):
        for lat, lon in [(35, -40), (-60, -45), (12.345, 178.9), (-89.9, -179.9)]:
            assert project(lat, lon) == project(lat, lon)

    def test_output_within_surface(self):
        for lat in np.linspace(-90, 90, 19):
            for lon in np.linspace(-180, 180, 37):
                point = project(lat, lon)
                assert 0 <= point.x <= 100
                assert 0 <= point.y <= 100

    def test_out_of_range_is_clamped(self):
        assert project(120, 0) == project(90, 0)
        assert project(0, -200) == project(0, -180)
        assert project(-95, 190) == ProjectedPoint(100.0, 100.0)

    def test_strict_rejects_out_of_range(self):
        with pytest.raises(ProjectionDomainError):
            project(91, 0, strict=True)
        with pytest.raises(ProjectionDomainError):
            project(0, 180.5, strict=True)

    def test_in_domain(self):
        assert in_domain(90, 180)
        assert in_domain(-90, -180)
        assert not in_domain(90.01, 0)


class TestProjectMany:
    """Test cases for vectorized projection"""

    def test_matches_scalar_projection(self):
        lats = [35, -20, 10, -45]
        lons = [-40, 60, -120, 140]
        xs, ys = project_many(lats, lons)
        for lat, lon, x, y in zip(lats, lons, xs, ys):
            point = project(lat, lon)
            assert x == pytest.approx(point.x)
            assert y == pytest.approx(point.y)

    def test_clamps_like_scalar(self):
        xs, ys = project_many([100, -100], [0, 0])
        assert ys[0] == pytest.approx(0.0)
        assert ys[1] == pytest.approx(100.0)

    def test_strict_raises(self):
        with pytest.raises(ProjectionDomainError):
            project_many([0, 95], [0, 0], strict=True)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            project_many([0, 1], [0])
