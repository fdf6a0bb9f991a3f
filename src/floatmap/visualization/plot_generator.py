# src/floatmap/visualization/plot_generator.py
import plotly.express as px
import plotly.graph_objects as go
import folium
import pandas as pd
from typing import Optional, Tuple
import logging

from ..interaction.controller import InteractionState
from ..telemetry.store import TelemetryStore
from .frame import MapFrame
from .legend import legend_entries, status_visual
from .theme import DisplayTheme

logger = logging.getLogger(__name__)

# Simplified continent outlines in surface coordinates
CONTINENT_OUTLINES = {
    'North America': "M15,25 L25,20 L30,25 L28,35 L20,40 L15,35 Z",
    'South America': "M20,45 L25,40 L30,50 L28,65 L22,70 L18,60 Z",
    'Europe': "M45,20 L55,18 L58,25 L52,30 L45,28 Z",
    'Africa': "M45,35 L55,30 L58,45 L55,60 L48,65 L42,50 Z",
    'Asia': "M60,15 L80,12 L85,25 L82,35 L70,40 L60,30 Z",
    'Australia': "M75,55 L85,52 L88,60 L82,65 L75,62 Z",
}

# Marker diameter in pixels per surface unit of radius
MARKER_PIXELS_PER_UNIT = 9.0


class FloatMapPlotGenerator:
    def __init__(self, figure_height: int = 600):
        self.figure_height = figure_height

    def create_telemetry_figure(self, frame: MapFrame) -> go.Figure:
        """Draw a composed frame on the normalized 100 x 100 surface"""
        if frame.is_empty:
            return self._create_empty_plot("No float telemetry available", frame.theme)

        theme = frame.theme
        fig = go.Figure()

        self._add_ocean_layers(fig, frame)
        self._add_connectors(fig, frame)
        self._add_ripples(fig, frame)
        self._add_markers(fig, frame)
        self._add_labels(fig, frame)
        self._add_legend_panel(fig, frame)
        self._add_live_indicator(fig, theme)
        if frame.details is not None:
            self._add_details_panel(fig, frame)

        fig.update_layout(
            template=theme.plotly_template,
            height=self.figure_height,
            plot_bgcolor=theme.ocean_color,
            paper_bgcolor=theme.panel_background,
            margin=dict(l=10, r=10, t=10, b=10),
            showlegend=False,
            hovermode='closest',
            clickmode='event+select',
            dragmode=False,
            xaxis=dict(range=[0, 100], visible=False, fixedrange=True),
            yaxis=dict(range=[100, 0], visible=False, fixedrange=True,
                       scaleanchor='x', scaleratio=1),
        )
        return fig

    def _add_ocean_layers(self, fig: go.Figure, frame: MapFrame):
        """Waves and continent outlines"""
        theme = frame.theme
        for path in frame.waves:
            fig.add_shape(type='path', path=path, xref='x', yref='y',
                          line=dict(color=theme.wave_color, width=1), layer='below')

        for path in CONTINENT_OUTLINES.values():
            fig.add_shape(type='path', path=path, xref='x', yref='y',
                          fillcolor=theme.land_fill,
                          line=dict(color=theme.land_edge, width=1), layer='below')

    def _add_connectors(self, fig: go.Figure, frame: MapFrame):
        for connector in frame.connectors:
            fig.add_shape(
                type='line',
                x0=connector.x1, y0=connector.y1, x1=connector.x2, y1=connector.y2,
                xref='x', yref='y',
                line=dict(color=frame.theme.connector_color, width=1, dash='dot'),
                layer='below'
            )

    def _add_ripples(self, fig: go.Figure, frame: MapFrame):
        for ring in frame.ripples:
            if ring.radius <= 0 or ring.opacity <= 0:
                continue
            fig.add_shape(
                type='circle',
                x0=ring.x - ring.radius, x1=ring.x + ring.radius,
                y0=ring.y - ring.radius, y1=ring.y + ring.radius,
                xref='x', yref='y',
                line=dict(color=frame.theme.ripple_color, width=1),
                opacity=ring.opacity
            )

    def _add_markers(self, fig: go.Figure, frame: MapFrame):
        markers = frame.markers
        fig.add_trace(go.Scatter(
            x=[m.x for m in markers],
            y=[m.display_y for m in markers],
            mode='markers',
            customdata=[m.float_id for m in markers],
            hovertext=[m.hover_text for m in markers],
            hovertemplate='%{hovertext}<extra></extra>',
            marker=dict(
                size=[m.radius * m.scale * MARKER_PIXELS_PER_UNIT * 2 for m in markers],
                color=[m.fill for m in markers],
                line=dict(
                    color=[frame.theme.label_color if m.selected else m.edge for m in markers],
                    width=[3 if m.selected else 1.5 for m in markers]
                ),
                opacity=1.0
            ),
            name='Floats'
        ))

    def _add_labels(self, fig: go.Figure, frame: MapFrame):
        for marker in frame.markers:
            if not marker.show_label:
                continue
            fig.add_annotation(
                x=marker.x, y=marker.label_y,
                text=f"<b>{marker.float_id}</b>",
                showarrow=False,
                font=dict(color=frame.theme.label_color, size=12)
            )

    def _add_legend_panel(self, fig: go.Figure, frame: MapFrame):
        theme = frame.theme
        lines = ["<b>ARGO Float Status</b>"]
        for entry in frame.legend:
            lines.append(f"<span style='color:{entry.visual.gradient_end}'>●</span> {entry.text}")

        fig.add_annotation(
            x=0.01, y=0.01, xref='paper', yref='paper',
            xanchor='left', yanchor='bottom',
            text="<br>".join(lines),
            align='left',
            showarrow=False,
            bgcolor=theme.panel_background,
            bordercolor=theme.panel_border,
            borderpad=8,
            font=dict(color=theme.text_primary, size=12)
        )

    def _add_live_indicator(self, fig: go.Figure, theme: DisplayTheme):
        fig.add_annotation(
            x=0.01, y=0.99, xref='paper', yref='paper',
            xanchor='left', yanchor='top',
            text="<span style='color:#22c55e'>●</span> <b>Live Data</b>",
            showarrow=False,
            bgcolor=theme.panel_background,
            bordercolor=theme.panel_border,
            borderpad=6,
            font=dict(color=theme.text_primary, size=12)
        )

    def _add_details_panel(self, fig: go.Figure, frame: MapFrame):
        theme = frame.theme
        details = frame.details
        lines = [
            f"<b>{details.float_id}</b>",
            f"<span style='color:{theme.text_secondary}'>{details.region}</span>",
        ]
        for label, value in details.rows:
            if label == 'Status':
                value = f"<span style='color:{details.badge_color}'>{value}</span>"
            lines.append(f"{label}: <b>{value}</b>")

        fig.add_annotation(
            x=0.99, y=0.99, xref='paper', yref='paper',
            xanchor='right', yanchor='top',
            text="<br>".join(lines),
            align='left',
            showarrow=False,
            bgcolor=theme.panel_background,
            bordercolor=theme.panel_border,
            borderpad=10,
            font=dict(color=theme.text_primary, size=13)
        )

    def create_status_chart(self, store: TelemetryStore, theme: Optional[DisplayTheme] = None) -> go.Figure:
        """Bar chart of float counts per status"""
        theme = theme or DisplayTheme.for_mode(False)
        if len(store) == 0:
            return self._create_empty_plot("No float telemetry available", theme)

        entries = legend_entries(store)
        df = pd.DataFrame({
            'status': [entry.label for entry in entries],
            'count': [entry.count for entry in entries],
        })
        fig = px.bar(
            df, x='status', y='count', color='status',
            color_discrete_map={entry.label: entry.visual.gradient_end for entry in entries},
            title='ARGO Float Status',
            labels={'status': 'Status', 'count': 'Floats'}
        )
        fig.update_layout(template=theme.plotly_template, showlegend=False, height=320)
        return fig

    def create_geographic_map(self, store: TelemetryStore, state: Optional[InteractionState] = None) -> folium.Map:
        """Folium map of the floats at their real coordinates"""
        if len(store) == 0:
            return self._create_empty_map()

        state = state or InteractionState()
        df = store.to_dataframe()

        m = folium.Map(
            location=[df['latitude'].mean(), df['longitude'].mean()],
            zoom_start=2,
            tiles='OpenStreetMap',
            control_scale=True
        )

        # Sequential connectors in store order
        folium.PolyLine(
            [[f.latitude, f.longitude] for f in store],
            color='#3b82f6', weight=1, opacity=0.4, dash_array='4,4'
        ).add_to(m)

        for float_ in store:
            visual = status_visual(float_.status)
            highlighted = state.is_selected(float_.id) or state.is_hovered(float_.id)
            folium.CircleMarker(
                location=[float_.latitude, float_.longitude],
                radius=12 if highlighted else 8,
                popup=folium.Popup(self._create_popup(float_), max_width=300),
                tooltip=f"Float {float_.id}",
                color='white' if state.is_selected(float_.id) else visual.marker_edge,
                weight=3 if highlighted else 1,
                fill=True,
                fillColor=visual.marker_fill,
                fillOpacity=0.8
            ).add_to(m)

        folium.LatLngPopup().add_to(m)
        return m

    def _create_popup(self, float_) -> str:
        popup_parts = [
            f"<b>Float ID:</b> {float_.id}",
            f"<b>Region:</b> {float_.region}",
            f"<b>Status:</b> {float_.status.value}",
            f"<b>Temperature:</b> {float_.temperature:g}°C",
            f"<b>Salinity:</b> {float_.salinity:g} PSU",
            f"<b>Depth:</b> {float_.depth:g}m",
            f"<b>Location:</b> {float_.latitude:.2f}°, {float_.longitude:.2f}°",
            f"<b>Last Update:</b> {float_.last_update}",
        ]
        return "<br>".join(popup_parts)

    def _create_empty_map(self, center: Tuple[float, float] = (0, 0)) -> folium.Map:
        """Create empty map with informative message"""
        m = folium.Map(location=center, zoom_start=2)
        folium.Marker(
            center,
            icon=folium.DivIcon(html='<div style="color: red; font-size: 16px;">No data available</div>')
        ).add_to(m)
        return m

    def _create_empty_plot(self, message: str = "No data available",
                           theme: Optional[DisplayTheme] = None) -> go.Figure:
        """Create empty plot with message"""
        theme = theme or DisplayTheme.for_mode(False)
        fig = go.Figure()
        fig.add_annotation(
            text=message,
            xref="paper", yref="paper",
            x=0.5, y=0.5, xanchor='center', yanchor='middle',
            showarrow=False,
            font=dict(size=16, color="red")
        )
        fig.update_layout(
            template=theme.plotly_template,
            height=400,
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False)
        )
        return fig
