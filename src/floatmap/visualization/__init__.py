# src/floatmap/visualization/__init__.py
from .frame import MapFrame, compose_frame
from .legend import STATUS_VISUALS, legend_counts, legend_entries
from .plot_generator import FloatMapPlotGenerator
from .theme import DisplayTheme

__all__ = ['MapFrame', 'compose_frame', 'STATUS_VISUALS', 'legend_counts',
           'legend_entries', 'FloatMapPlotGenerator', 'DisplayTheme']
