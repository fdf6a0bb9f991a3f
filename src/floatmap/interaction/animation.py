# src/floatmap/interaction/animation.py
"""Render parameters derived from the animation clock and float position.

Everything here is a pure function of (phase or ticks, index, settings). No
per-float timers exist. Bob and waves follow the wrapping phase; ripple and
connector dash follow the unwrapped tick count so their cycles stay continuous
whatever their durations.
"""
import math
from typing import List, NamedTuple, Optional, Sequence

from ..config import MapSettings
from ..telemetry.models import FloatStatus

DEFAULT_SETTINGS = MapSettings()

WAVE_COUNT = 8
WAVE_SPACING = 2.0
WAVE_AMPLITUDE = 3.0
WAVE_FREQUENCY = 0.1
WAVE_PHASE_STEP = 30


class RippleParams(NamedTuple):
    radius: float
    opacity: float
    progress: float


def ticks_to_seconds(ticks: int, settings: MapSettings = DEFAULT_SETTINGS) -> float:
    return ticks * settings.tick_period_s


def marker_radius(hovered: bool, selected: bool,
                  settings: MapSettings = DEFAULT_SETTINGS) -> float:
    if hovered or selected:
        return settings.marker_radius_active
    return settings.marker_radius


def marker_scale(hovered: bool, settings: MapSettings = DEFAULT_SETTINGS) -> float:
    return settings.hover_scale if hovered else 1.0


def bob_offset(phase: int, index: int, settings: MapSettings = DEFAULT_SETTINGS) -> float:
    """Vertical bobbing offset; each index runs at its own phase"""
    angle = phase * settings.bob_frequency + index * settings.bob_phase_shift
    return math.sin(angle) * settings.bob_amplitude


def _interpolate(keyframes: Sequence[float], progress: float) -> float:
    """Linear interpolation over evenly spaced keyframes"""
    segments = len(keyframes) - 1
    position = progress * segments
    segment = min(int(position), segments - 1)
    local = position - segment
    start, end = keyframes[segment], keyframes[segment + 1]
    return start + (end - start) * local


def ripple(ticks: int, index: int, status: FloatStatus,
           settings: MapSettings = DEFAULT_SETTINGS) -> Optional[RippleParams]:
    """Expanding ring for active floats, staggered by store position"""
    if status is not FloatStatus.ACTIVE:
        return None

    duration = settings.ripple_duration_s
    delay = index * settings.ripple_delay_step_s
    progress = ((ticks_to_seconds(ticks, settings) - delay) % duration) / duration
    if progress >= 1.0:
        # Float modulo of a tiny negative can land on the duration itself
        progress = 0.0

    radius = _interpolate((0.0, settings.ripple_max_radius, 0.0), progress)
    opacity = _interpolate((1.0, 0.3, 0.0), progress)
    return RippleParams(radius, opacity, progress)


def connector_dash_offset(ticks: int, settings: MapSettings = DEFAULT_SETTINGS) -> float:
    cycle = settings.connector_cycle_s
    return -(ticks_to_seconds(ticks, settings) % cycle) / cycle


def wave_paths(phase: int, count: int = WAVE_COUNT) -> List[str]:
    """SVG path strings for the decorative ocean waves"""
    paths = []
    for i in range(count):
        base = 50 + i * WAVE_SPACING
        crest = 45 + i * WAVE_SPACING + math.sin((phase + i * WAVE_PHASE_STEP) * WAVE_FREQUENCY) * WAVE_AMPLITUDE
        paths.append(f"M0,{base:g} Q25,{crest:.3f} 50,{base:g} T100,{base:g}")
    return paths
