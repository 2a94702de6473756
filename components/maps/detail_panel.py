"""
Monastery details panel.

Target of the "View Details" link in map popups: the monastery name arrives
as the ``name`` query parameter.
"""

import streamlit as st
import folium
from typing import List, Optional
import logging

from .catalog import LocationCatalog, LocationRecord
from .map_view import satellite_url

logger = logging.getLogger(__name__)


class MonasteryDetailsPanel:
    """Panel for displaying one monastery."""

    def __init__(self, catalog: LocationCatalog, detail_zoom: int = 14):
        self.catalog = catalog
        self.detail_zoom = detail_zoom

    def nearby_in_region(self, record: LocationRecord) -> List[LocationRecord]:
        """Other monasteries in the same region, catalog order."""
        return [r for r in self.catalog if r.region == record.region and r.name != record.name]

    def create_detail_map(self, record: LocationRecord) -> folium.Map:
        m = folium.Map(location=[record.lat, record.lng], zoom_start=self.detail_zoom)
        folium.Marker(location=[record.lat, record.lng], tooltip=record.name).add_to(m)
        return m

    def render_details(self, name: Optional[str]) -> None:
        """
        Render the details for the named monastery.

        Args:
            name: Monastery name from the query string (may be missing)
        """
        if not name:
            st.info("👈 Pick a monastery on the map and choose **View Details**.")
            return

        record = self.catalog.find(name)
        if record is None:
            st.warning(f"⚠️ No monastery named '{name}' was found.")
            return

        st.title(f"🏯 {record.name}")

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Sect", record.category)
        with col2:
            st.metric("Location", record.region)
        with col3:
            st.metric("Coordinates", f"{record.lat:.4f}, {record.lng:.4f}")

        st.markdown(f"[View on Google Maps (Satellite) →]({satellite_url(record)})")

        from streamlit_folium import st_folium
        st_folium(self.create_detail_map(record), width=None, height=400,
                  returned_objects=[], key="monastery_detail_map")

        nearby = self.nearby_in_region(record)
        if nearby:
            st.markdown(f"### Other monasteries in {record.region}")
            for other in nearby:
                st.markdown(f"• **{other.name}** ({other.category})")
