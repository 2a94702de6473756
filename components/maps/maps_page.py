"""
Maps page for the monastery explorer.

This module provides the interactive map page (filters on the left, Folium
map on the right) and keeps the per-session AppContext in Streamlit session
state.
"""

import streamlit as st
from typing import Optional
import logging

from components.config import get_site_config
from .app_context import AppContext
from .controls import FilterControls
from utils.icons import render_title_with_icon

logger = logging.getLogger(__name__)

CONTEXT_KEY = 'app_context'


def get_app_context() -> AppContext:
    """Return this session's AppContext, creating and initializing it on first use."""
    if CONTEXT_KEY not in st.session_state:
        context = AppContext(get_site_config())
        context.initialize()
        st.session_state[CONTEXT_KEY] = context
    return st.session_state[CONTEXT_KEY]


def reset_app_context() -> None:
    """Tear down the session's AppContext; the next page run builds a fresh one."""
    context: Optional[AppContext] = st.session_state.get(CONTEXT_KEY)
    if context is not None:
        context.teardown()
        del st.session_state[CONTEXT_KEY]


class MapsPageInterface:
    """Interactive monastery map with filter controls."""

    def __init__(self, context: AppContext):
        self.context = context
        self.controls = FilterControls()

    def render_maps_page(self) -> None:
        """Render the complete map page."""
        render_title_with_icon("map", "Monasteries of Sikkim")
        st.markdown("Explore the monasteries of Sikkim. Filter by sect or location, or search by name.")

        col_controls, col_map = st.columns([1, 2])

        with col_controls:
            criteria, search_clicked = self.controls.render_filter_panel()

            if self.controls.should_apply(criteria, self.context.last_result, search_clicked):
                if search_clicked:
                    self.context.search(criteria)
                else:
                    self.context.apply_filter(criteria)

            self.controls.render_feedback(self.context.last_result)

            if st.button("↺ Reset Map", key="monastery_reset_map"):
                for key in ("monastery_sect", "monastery_location", "monastery_search"):
                    st.session_state.pop(key, None)
                reset_app_context()
                st.rerun()

        with col_map:
            self._render_map()

    def _render_map(self) -> None:
        map_settings = self.context.config.get_map_settings()
        from streamlit_folium import st_folium
        st_folium(
            self.context.map_view.viewport,
            width=None,
            height=map_settings.get('map_height', 550),
            returned_objects=[],
            key="monastery_map"
        )
        st.caption(f"{len(self.context.map_view.markers)} monasteries shown")


def render_maps_page() -> None:
    """Entry point used by the app navigation."""
    MapsPageInterface(get_app_context()).render_maps_page()
