# src/floatmap/visualization/frame.py
"""Compose everything needed to draw one frame of the telemetry map.

A frame is recomputed from (store, interaction state, theme) on every tick or
interaction; nothing in it is stored between frames.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import MapSettings
from ..interaction.animation import (bob_offset, connector_dash_offset, marker_radius,
                                     marker_scale, ripple, wave_paths)
from ..interaction.controller import InteractionState
from ..projection import project
from ..telemetry.models import Float
from ..telemetry.store import TelemetryStore
from .legend import LegendEntry, legend_entries, status_visual
from .theme import DisplayTheme

LABEL_OFFSET = 2.0


@dataclass(frozen=True)
class MarkerParams:
    float_id: str
    index: int
    x: float
    y: float
    display_y: float
    radius: float
    scale: float
    fill: str
    edge: str
    hovered: bool
    selected: bool
    show_label: bool
    hover_text: str

    @property
    def label_y(self) -> float:
        return self.y - LABEL_OFFSET


@dataclass(frozen=True)
class RippleRing:
    float_id: str
    x: float
    y: float
    radius: float
    opacity: float


@dataclass(frozen=True)
class Connector:
    from_id: str
    to_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    dash_offset: float


@dataclass(frozen=True)
class FloatDetails:
    """Information panel for the selected float"""
    float_id: str
    region: str
    status_label: str
    badge_color: str
    rows: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class MapFrame:
    phase: int
    theme: DisplayTheme
    markers: Tuple[MarkerParams, ...] = ()
    ripples: Tuple[RippleRing, ...] = ()
    connectors: Tuple[Connector, ...] = ()
    waves: Tuple[str, ...] = ()
    legend: Tuple[LegendEntry, ...] = ()
    details: Optional[FloatDetails] = None

    @property
    def is_empty(self) -> bool:
        return not self.markers


def float_details(float_: Float) -> FloatDetails:
    visual = status_visual(float_.status)
    rows = (
        ('Status', float_.status.value),
        ('Temperature', f"{float_.temperature:g}°C"),
        ('Salinity', f"{float_.salinity:g} PSU"),
        ('Depth', f"{float_.depth:g}m"),
        ('Position', f"{float_.latitude:g}°, {float_.longitude:g}°"),
        ('Last Update', float_.last_update),
    )
    return FloatDetails(float_.id, float_.region, visual.label, visual.badge_color, rows)


def build_connectors(store: TelemetryStore, ticks: int = 0,
                     settings: Optional[MapSettings] = None) -> Tuple[Connector, ...]:
    """Connect each float to the next one in store order.

    Pairing follows storage order, not geographic proximity.
    """
    settings = settings or MapSettings()
    strict = not settings.clamp_out_of_range
    dash_offset = connector_dash_offset(ticks, settings)

    connectors = []
    for current, following in zip(store, list(store)[1:]):
        start = project(current.latitude, current.longitude, strict=strict)
        end = project(following.latitude, following.longitude, strict=strict)
        connectors.append(Connector(current.id, following.id, start.x, start.y, end.x, end.y, dash_offset))
    return tuple(connectors)


def _hover_text(float_: Float) -> str:
    return (f"<b>{float_.id}</b><br>{float_.region}<br>"
            f"Status: {float_.status.value}<br>"
            f"Temp: {float_.temperature:g}°C | Sal: {float_.salinity:g} PSU<br>"
            f"Depth: {float_.depth:g}m<br>Updated {float_.last_update}")


def compose_frame(store: TelemetryStore, state: InteractionState, theme: DisplayTheme,
                  settings: Optional[MapSettings] = None) -> MapFrame:
    settings = settings or MapSettings()
    strict = not settings.clamp_out_of_range
    phase = state.animation_phase
    ticks = state.elapsed_ticks

    markers = []
    ripples = []
    for index, float_ in enumerate(store):
        point = project(float_.latitude, float_.longitude, strict=strict)
        hovered = state.is_hovered(float_.id)
        selected = state.is_selected(float_.id)
        visual = status_visual(float_.status)

        markers.append(MarkerParams(
            float_id=float_.id,
            index=index,
            x=point.x,
            y=point.y,
            display_y=point.y + bob_offset(phase, index, settings),
            radius=marker_radius(hovered, selected, settings),
            scale=marker_scale(hovered, settings),
            fill=visual.marker_fill,
            edge=visual.marker_edge,
            hovered=hovered,
            selected=selected,
            show_label=hovered or selected,
            hover_text=_hover_text(float_),
        ))

        ring = ripple(ticks, index, float_.status, settings)
        if ring is not None:
            ripples.append(RippleRing(float_.id, point.x, point.y, ring.radius, ring.opacity))

    details = float_details(state.selected_float) if state.selected_float is not None else None

    return MapFrame(
        phase=phase,
        theme=theme,
        markers=tuple(markers),
        ripples=tuple(ripples),
        connectors=build_connectors(store, ticks, settings),
        waves=tuple(wave_paths(phase)),
        legend=tuple(legend_entries(store)),
        details=details,
    )
