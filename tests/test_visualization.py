# tests/test_visualization.py

import pytest
from pathlib import Path
import sys
import folium
import plotly.graph_objects as go

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from floatmap.config import MapSettings
from floatmap.exceptions import ProjectionDomainError
from floatmap.interaction import InteractionController, InteractionState
from floatmap.telemetry import Float, FloatStatus, TelemetryStore, reference_store
from floatmap.visualization import DisplayTheme, FloatMapPlotGenerator, compose_frame
from floatmap.visualization.frame import build_connectors, float_details


class TestFrameComposition:
    """Test cases for composing render parameters"""

    @pytest.fixture(autouse=True)
    def setup_frame(self):
        self.store = reference_store()
        self.controller = InteractionController(self.store)
        self.theme = DisplayTheme.for_mode(False)

    def compose(self):
        return compose_frame(self.store, self.controller.state, self.theme)

    def test_one_marker_per_float(self):
        frame = self.compose()
        assert [m.float_id for m in frame.markers] == self.store.ids()

    def test_markers_use_projection(self):
        marker = self.compose().markers[1]
        assert marker.x == pytest.approx(66.6667, abs=1e-3)
        assert marker.y == pytest.approx(61.1111, abs=1e-3)

    def test_ripples_only_for_active_floats(self):
        frame = self.compose()
        active_ids = [f.id for f in self.store if f.status is FloatStatus.ACTIVE]
        assert [ring.float_id for ring in frame.ripples] == active_ids
        assert 'ARG004' not in {ring.float_id for ring in frame.ripples}
        assert 'ARG008' not in {ring.float_id for ring in frame.ripples}

    def test_connectors_join_store_neighbours(self):
        connectors = self.compose().connectors
        assert len(connectors) == len(self.store) - 1
        ids = self.store.ids()
        for i, connector in enumerate(connectors):
            assert connector.from_id == ids[i]
            assert connector.to_id == ids[i + 1]

    def test_connectors_for_small_stores(self):
        assert build_connectors(TelemetryStore([])) == ()
        assert build_connectors(TelemetryStore([self.store[0]])) == ()

    def test_hover_and_selection_markers(self):
        self.controller.pointer_enter('ARG003')
        self.controller.click_id('ARG005')
        frame = self.compose()
        by_id = {m.float_id: m for m in frame.markers}

        assert by_id['ARG003'].radius == 1.2
        assert by_id['ARG003'].scale == 1.3
        assert by_id['ARG003'].show_label
        assert by_id['ARG005'].radius == 1.2
        assert by_id['ARG005'].scale == 1.0
        assert by_id['ARG005'].selected
        assert by_id['ARG001'].radius == 0.8
        assert not by_id['ARG001'].show_label
        assert by_id['ARG003'].label_y == pytest.approx(by_id['ARG003'].y - 2)

    def test_bobbing_changes_with_phase(self):
        first = self.compose().markers[2].display_y
        self.controller.advance(15)
        second = self.compose().markers[2].display_y
        assert first != second
        assert abs(second - self.compose().markers[2].y) <= 0.3

    def test_details_panel(self):
        assert self.compose().details is None
        self.controller.click_id('ARG002')
        details = self.compose().details
        rows = dict(details.rows)
        assert details.float_id == 'ARG002'
        assert details.region == 'Indian Ocean'
        assert rows['Temperature'] == '26.8°C'
        assert rows['Salinity'] == '35.8 PSU'
        assert rows['Depth'] == '980m'
        assert rows['Position'] == '-20°, 60°'
        assert rows['Last Update'] == '1 min ago'

    def test_float_details_status(self):
        details = float_details(self.store.get('ARG008'))
        assert details.status_label == 'Inactive'
        assert dict(details.rows)['Status'] == 'inactive'

    def test_legend_in_frame(self):
        assert sum(entry.count for entry in self.compose().legend) == len(self.store)

    def test_strict_settings_reject_bad_coordinates(self):
        bad = Float('BAD', 95, 0, 10, 35, 100, FloatStatus.ACTIVE, 'now', 'Nowhere')
        store = TelemetryStore([bad])
        settings = MapSettings(clamp_out_of_range=False)
        with pytest.raises(ProjectionDomainError):
            compose_frame(store, InteractionState(), self.theme, settings)

        frame = compose_frame(store, InteractionState(), self.theme)
        assert frame.markers[0].y == pytest.approx(0.0)

    def test_dark_mode_only_changes_colors(self):
        light = compose_frame(self.store, self.controller.state, DisplayTheme.for_mode(False))
        dark = compose_frame(self.store, self.controller.state, DisplayTheme.for_mode(True))
        assert light.markers == dark.markers
        assert light.theme.panel_background != dark.theme.panel_background

    def test_frame_collections_are_immutable(self):
        frame = self.compose()
        for collection in (frame.markers, frame.ripples, frame.connectors, frame.waves, frame.legend):
            assert isinstance(collection, tuple)
        with pytest.raises(AttributeError):
            frame.markers.append(frame.markers[0])
        assert compose_frame(TelemetryStore([]), InteractionState(), self.theme).markers == ()

    def test_ripple_and_dash_continue_across_phase_wrap(self):
        settings = MapSettings(ripple_duration_s=5.0, connector_cycle_s=7.0)
        controller = InteractionController(self.store, settings)
        controller.advance(359)
        before = compose_frame(self.store, controller.state, self.theme, settings)
        controller.tick()
        after = compose_frame(self.store, controller.state, self.theme, settings)

        assert after.phase == 0
        # 35.9 s -> 36.0 s on a 5 s ripple: progress 0.18 -> 0.20, both rising
        assert before.ripples[0].radius == pytest.approx(0.18 * 2 * 3.0)
        assert after.ripples[0].radius == pytest.approx(0.20 * 2 * 3.0)
        # 36 s on a 7 s dash cycle is 1 s in, not back at the start
        assert after.connectors[0].dash_offset == pytest.approx(-1.0 / 7.0)


class TestPlotGenerator:
    """Test cases for figure and map generation"""

    @pytest.fixture(autouse=True)
    def setup_generator(self):
        self.store = reference_store()
        self.generator = FloatMapPlotGenerator(figure_height=500)
        self.theme = DisplayTheme.for_mode(True)

    def test_telemetry_figure(self):
        state = InteractionState(selected_float=self.store.get('ARG001'), hovered_id='ARG002')
        frame = compose_frame(self.store, state, self.theme)
        fig = self.generator.create_telemetry_figure(frame)

        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 1
        assert list(fig.data[0].customdata) == self.store.ids()
        assert fig.layout.height == 500
        assert tuple(fig.layout.yaxis.range) == (100, 0)

        annotation_text = " ".join(a.text for a in fig.layout.annotations)
        assert 'Active (8)' in annotation_text
        assert 'Live Data' in annotation_text
        assert 'ARG001' in annotation_text

    def test_empty_store_figure(self):
        frame = compose_frame(TelemetryStore([]), InteractionState(), self.theme)
        fig = self.generator.create_telemetry_figure(frame)
        assert len(fig.data) == 0
        assert 'No float telemetry available' in fig.layout.annotations[0].text

    def test_status_chart(self):
        fig = self.generator.create_status_chart(self.store, self.theme)
        counts = {}
        for trace in fig.data:
            counts.update(dict(zip(trace.x, trace.y)))
        assert counts == {'Active': 8, 'Maintenance': 1, 'Inactive': 1}

    def test_geographic_map(self):
        state = InteractionState(selected_float=self.store.get('ARG003'))
        m = self.generator.create_geographic_map(self.store, state)
        assert isinstance(m, folium.Map)
        html = m.get_root().render()
        assert 'ARG003' in html
        assert 'Indian Ocean' in html

    def test_empty_geographic_map(self):
        m = self.generator.create_geographic_map(TelemetryStore([]))
        assert 'No data available' in m.get_root().render()
