# src/floatmap/visualization/theme.py
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DisplayTheme:
    """Colors for light or dark display mode. Affects nothing but color."""
    dark_mode: bool
    background_gradient: Tuple[str, ...]
    panel_background: str
    panel_border: str
    text_primary: str
    text_secondary: str
    wave_color: str = 'rgba(255,255,255,0.1)'
    land_fill: str = 'rgba(34, 197, 94, 0.2)'
    land_edge: str = 'rgba(34, 197, 94, 0.4)'
    connector_color: str = 'rgba(59, 130, 246, 0.3)'
    ripple_color: str = 'rgba(34, 197, 94, 0.6)'
    marker_outline: str = 'rgba(255,255,255,0.8)'
    label_color: str = 'white'

    @property
    def plotly_template(self) -> str:
        return 'plotly_dark' if self.dark_mode else 'plotly_white'

    @property
    def ocean_color(self) -> str:
        return self.background_gradient[len(self.background_gradient) // 2]

    @classmethod
    def for_mode(cls, dark_mode: bool) -> 'DisplayTheme':
        if dark_mode:
            return cls(
                dark_mode=True,
                background_gradient=('#1e3a8a', '#1e40af', '#2563eb', '#3b82f6', '#60a5fa'),
                panel_background='rgba(31, 41, 55, 0.95)',
                panel_border='#374151',
                text_primary='#ffffff',
                text_secondary='#9ca3af',
            )
        return cls(
            dark_mode=False,
            background_gradient=('#3b82f6', '#2563eb', '#1d4ed8', '#1e40af', '#1e3a8a'),
            panel_background='rgba(255, 255, 255, 0.95)',
            panel_border='#e5e7eb',
            text_primary='#111827',
            text_secondary='#4b5563',
        )
