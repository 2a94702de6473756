"""
Filter controls for the monastery map.

This module renders the sect / location selectors and the search box and
turns the widget values into FilterCriteria.
"""

import streamlit as st
from typing import Optional, Tuple
import logging

from .catalog import SECT_OPTIONS, REGION_OPTIONS, WILDCARD
from .filter_engine import FilterCriteria, FilterResult
from utils.icons import render_subheader_with_icon

logger = logging.getLogger(__name__)


class FilterControls:
    """Manages the sect, location and free-text filter widgets."""

    def __init__(self, sect_options=None, region_options=None):
        self.sect_options = list(sect_options or SECT_OPTIONS)
        self.region_options = list(region_options or REGION_OPTIONS)

    def render_filter_panel(self, key_prefix: str = "monastery") -> Tuple[FilterCriteria, bool]:
        """
        Render the filter widgets.

        Args:
            key_prefix: Prefix for Streamlit widget keys

        Returns:
            Tuple of (criteria from the current widget values, search button clicked)
        """
        render_subheader_with_icon("search", "Find a Monastery")

        category = st.selectbox(
            "Sect",
            options=self.sect_options,
            format_func=lambda x: "All Sects" if x == WILDCARD else x,
            key=f"{key_prefix}_sect"
        )

        region = st.selectbox(
            "Location",
            options=self.region_options,
            format_func=lambda x: "All Locations" if x == WILDCARD else x,
            key=f"{key_prefix}_location"
        )

        search_text = st.text_input(
            "Search",
            placeholder="Search by name or location...",
            key=f"{key_prefix}_search"
        )

        search_clicked = st.button("Search", key=f"{key_prefix}_search_button")

        criteria = FilterCriteria(
            category=category,
            region=region,
            search_text=search_text
        )
        return criteria, search_clicked

    def should_apply(self, criteria: FilterCriteria, last_result: Optional[FilterResult],
                     search_clicked: bool) -> bool:
        """A filter action happened if the search button was pressed or any selection changed."""
        if search_clicked:
            return True
        previous = last_result.criteria if last_result is not None else FilterCriteria()
        return criteria != previous

    def render_feedback(self, result: Optional[FilterResult]) -> None:
        """Show the match count after a filter action."""
        if result is None:
            return
        if result.count == 0:
            st.warning(result.feedback)
        else:
            st.info(result.feedback)
