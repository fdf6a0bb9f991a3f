# streamlit_app/main.py

import logging
import sys
import time
from pathlib import Path

import streamlit as st
from streamlit_autorefresh import st_autorefresh
from streamlit_folium import folium_static

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from floatmap.config import config
from floatmap.exceptions import FloatMapError
from floatmap.interaction import InteractionController
from floatmap.telemetry import reference_store
from floatmap.visualization import DisplayTheme, FloatMapPlotGenerator, compose_frame

# Configure page
st.set_page_config(
    page_title="ARGO Float Map",
    page_icon="🌊",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        color: #1f77b4;
        font-weight: bold;
        margin-bottom: 0.5rem;
    }
    .detail-card {
        padding: 1rem;
        border-radius: 10px;
        border-left: 4px solid #1f77b4;
        background-color: rgba(240, 242, 246, 0.6);
    }
</style>
""", unsafe_allow_html=True)

logger = logging.getLogger(__name__)

NO_FLOAT = "None"


class FloatMapDashboard:
    """Streamlit page for the live float map"""

    def __init__(self):
        self.settings = config.map_settings()
        self.plot_generator = FloatMapPlotGenerator(
            figure_height=int(config.get('visualization.figure_height', 600))
        )
        self.initialize_session()

    def initialize_session(self):
        """One controller per browser session, created on first render"""
        if 'controller' not in st.session_state:
            st.session_state.controller = InteractionController(reference_store(), self.settings)
            st.session_state.last_tick_time = time.monotonic()
            st.session_state.handled_chart_selection = None
            logger.info("Created float map session")

    @property
    def controller(self) -> InteractionController:
        return st.session_state.controller

    def advance_clock(self):
        """Apply the ticks that elapsed since the previous rerun"""
        now = time.monotonic()
        period = self.settings.tick_period_s
        ticks = int((now - st.session_state.last_tick_time) / period)
        if ticks > 0:
            self.controller.advance(ticks)
            st.session_state.last_tick_time += ticks * period

    def render_sidebar(self) -> bool:
        store = self.controller.store
        with st.sidebar:
            st.header("Display")
            dark_mode = st.toggle("Dark mode", value=bool(config.get('display.dark_mode', False)))
            live = st.toggle("Live animation", value=True)

            st.header("Floats")
            hovered = st.selectbox("Highlight float", [NO_FLOAT] + store.ids(), key="highlight_float")
            if hovered == NO_FLOAT:
                self.controller.pointer_leave()
            else:
                self.controller.pointer_enter(hovered)

            target = st.selectbox("Float", store.ids(), key="select_target")
            if st.button("Select / deselect"):
                self.controller.click_id(target)

        if live:
            st_autorefresh(interval=int(config.get('display.refresh_ms', 500)), key="map_refresh")
        return dark_mode

    def handle_chart_selection(self, event):
        """Treat a newly clicked marker as a click on that float"""
        points = []
        if event and event.selection:
            points = event.selection.get('points', [])

        clicked = None
        for point in points:
            customdata = point.get('customdata')
            if isinstance(customdata, (list, tuple)):
                customdata = customdata[0] if customdata else None
            if customdata:
                clicked = customdata
                break

        previous = st.session_state.handled_chart_selection
        if clicked == previous:
            return
        st.session_state.handled_chart_selection = clicked

        # Plotly clears the point selection on a second click of the same marker
        target = clicked if clicked is not None else previous
        if clicked is None and not self.controller.state.is_selected(previous):
            return
        self.controller.click_id(target)
        st.rerun()

    def render_map(self, theme: DisplayTheme):
        frame = compose_frame(self.controller.store, self.controller.state, theme, self.settings)
        try:
            fig = self.plot_generator.create_telemetry_figure(frame)
        except Exception as e:
            logger.error(f"Map rendering failed: {e}")
            fig = self.plot_generator._create_empty_plot(f"Error generating plot: {str(e)}", theme)

        event = st.plotly_chart(fig, use_container_width=True, key="telemetry_map",
                                on_select="rerun", selection_mode="points")
        self.handle_chart_selection(event)
        return frame

    def render_details(self, frame):
        details = frame.details
        if details is None:
            st.info("Click a float on the map to see its telemetry")
            return

        col1, col2 = st.columns([4, 1])
        with col1:
            st.subheader(details.float_id)
            st.caption(details.region)
        with col2:
            if st.button("×", key="dismiss_details", help="Close"):
                self.controller.dismiss()
                st.rerun()

        for label, value in details.rows:
            left, right = st.columns(2)
            left.write(label)
            right.write(f"**{value}**")

    def run(self):
        st.markdown('<div class="main-header">🌊 Live ARGO Float Map</div>', unsafe_allow_html=True)

        dark_mode = self.render_sidebar()
        self.advance_clock()
        theme = DisplayTheme.for_mode(dark_mode)
        store = self.controller.store

        col1, col2 = st.columns([3, 1])
        with col1:
            frame = self.render_map(theme)
        with col2:
            self.render_details(frame)
            st.plotly_chart(self.plot_generator.create_status_chart(store, theme),
                            use_container_width=True)

        tab1, tab2 = st.tabs(["Float Table", "Geographic View"])
        with tab1:
            st.dataframe(store.to_dataframe(), use_container_width=True, hide_index=True)
        with tab2:
            folium_static(self.plot_generator.create_geographic_map(store, self.controller.state),
                          width=900, height=500)


def main():
    try:
        FloatMapDashboard().run()
    except FloatMapError as e:
        st.error(f"Float map error: {e}")


if __name__ == "__main__":
    main()
