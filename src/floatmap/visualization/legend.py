# src/floatmap/visualization/legend.py
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

import pandas as pd

from ..telemetry.models import Float, FloatStatus


@dataclass(frozen=True)
class StatusVisual:
    label: str
    gradient_start: str
    gradient_end: str
    marker_fill: str
    marker_edge: str
    badge_color: str
    folium_color: str


STATUS_VISUALS: Mapping[FloatStatus, StatusVisual] = {
    FloatStatus.ACTIVE: StatusVisual(
        label='Active',
        gradient_start='#4ade80', gradient_end='#10b981',
        marker_fill='#10b981', marker_edge='#059669',
        badge_color='#4ade80', folium_color='green',
    ),
    FloatStatus.MAINTENANCE: StatusVisual(
        label='Maintenance',
        gradient_start='#facc15', gradient_end='#f97316',
        marker_fill='#f59e0b', marker_edge='#d97706',
        badge_color='#facc15', folium_color='orange',
    ),
    FloatStatus.INACTIVE: StatusVisual(
        label='Inactive',
        gradient_start='#f87171', gradient_end='#dc2626',
        marker_fill='#ef4444', marker_edge='#dc2626',
        badge_color='#f87171', folium_color='red',
    ),
}

_missing = set(FloatStatus) - set(STATUS_VISUALS)
if _missing:
    raise RuntimeError(f"No visual defined for statuses: {sorted(s.value for s in _missing)}")


@dataclass(frozen=True)
class LegendEntry:
    status: FloatStatus
    label: str
    count: int
    visual: StatusVisual

    @property
    def text(self) -> str:
        return f"{self.label} ({self.count})"


def status_visual(status: FloatStatus) -> StatusVisual:
    return STATUS_VISUALS[status]


def legend_counts(floats: Iterable[Float]) -> Dict[FloatStatus, int]:
    """Float counts per status; every status is present"""
    statuses = pd.Series([float_.status for float_ in floats], dtype=object)
    tallies = statuses.value_counts()
    return {status: int(tallies.get(status, 0)) for status in FloatStatus}


def legend_entries(floats: Iterable[Float]) -> List[LegendEntry]:
    counts = legend_counts(floats)
    return [
        LegendEntry(status, STATUS_VISUALS[status].label, counts[status], STATUS_VISUALS[status])
        for status in FloatStatus
    ]
