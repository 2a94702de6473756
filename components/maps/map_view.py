"""
Map rendering for the monastery explorer.

MapView owns a single Folium viewport and the marker layer attached to it.
Each render clears the previous markers and draws one marker per record,
keeping a side table from marker name to source record.
"""

from typing import Dict, List, Optional, Sequence, Any
from urllib.parse import quote
import html
import logging

import folium

from .catalog import LocationCatalog, LocationRecord

logger = logging.getLogger(__name__)

GOOGLE_MAPS_SATELLITE_URL = "https://www.google.com/maps/@{lat},{lng},18z/data=!3m1!1e3"

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def detail_url(detail_page: str, name: str) -> str:
    """Link to the detail view for a monastery."""
    return f"{detail_page}?name={quote(name, safe=_URI_COMPONENT_SAFE)}"


def satellite_url(record: LocationRecord) -> str:
    """Google Maps deep link opening satellite imagery at the record's coordinates."""
    return GOOGLE_MAPS_SATELLITE_URL.format(lat=record.lat, lng=record.lng)


class MapView:
    """Owns the Folium viewport and the current marker set."""

    def __init__(self, catalog: LocationCatalog, map_settings: Optional[Dict[str, Any]] = None):
        settings = map_settings or {}
        self.catalog = catalog
        self.default_center = list(settings.get('default_center', [27.33, 88.62]))
        self.default_zoom = settings.get('default_zoom', 10)
        self.tile_url = settings.get('tile_url', 'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png')
        self.tile_attribution = settings.get('tile_attribution', 'OpenStreetMap contributors')
        self.detail_page = settings.get('detail_page', '/')

        self._map: Optional[folium.Map] = None
        self._marker_layer: Optional[folium.FeatureGroup] = None
        self._markers: List[folium.Marker] = []
        self._records_by_marker: Dict[str, LocationRecord] = {}

    @property
    def is_initialized(self) -> bool:
        return self._map is not None

    @property
    def viewport(self) -> folium.Map:
        if self._map is None:
            raise RuntimeError("MapView has not been initialized")
        return self._map

    @property
    def marker_layer(self) -> folium.FeatureGroup:
        if self._marker_layer is None:
            raise RuntimeError("MapView has not been initialized")
        return self._marker_layer

    @property
    def markers(self) -> List[folium.Marker]:
        return list(self._markers)

    def record_for(self, marker: folium.Marker) -> Optional[LocationRecord]:
        """Source record of a marker in the current render."""
        return self._records_by_marker.get(marker.get_name())

    def rendered_records(self) -> List[LocationRecord]:
        return [self._records_by_marker[marker.get_name()] for marker in self._markers]

    def initialize(self) -> folium.Map:
        """
        Build the viewport, attach the tile and marker layers, and draw
        the full catalog.

        Calling this again replaces the existing viewport.
        """
        if self._map is not None:
            self.teardown()

        self._map = folium.Map(
            location=self.default_center,
            zoom_start=self.default_zoom,
            tiles=None
        )
        folium.TileLayer(
            tiles=self.tile_url,
            attr=self.tile_attribution,
            name='OpenStreetMap'
        ).add_to(self._map)

        self._marker_layer = folium.FeatureGroup(name='Monasteries')
        self._marker_layer.add_to(self._map)

        logger.info(f"Created map centered at {self.default_center} (zoom {self.default_zoom})")
        self.render(self.catalog.records)
        return self._map

    def teardown(self) -> None:
        """Drop the viewport and every marker."""
        self._clear_markers()
        self._marker_layer = None
        self._map = None
        logger.debug("Map viewport torn down")

    def render(self, records: Sequence[LocationRecord]) -> None:
        """
        Replace the current markers with one marker per record.

        Args:
            records: Records to draw, in draw order
        """
        layer = self.marker_layer
        self._clear_markers()

        for record in records:
            marker = folium.Marker(
                location=[record.lat, record.lng],
                popup=folium.Popup(self._create_popup_content(record), max_width=300),
                tooltip=record.name
            )
            layer.add_child(marker)
            self._markers.append(marker)
            self._records_by_marker[marker.get_name()] = record

        logger.info(f"Rendered {len(self._markers)} markers on map")

    def _clear_markers(self) -> None:
        if self._marker_layer is not None:
            for marker in self._markers:
                self._marker_layer._children.pop(marker.get_name(), None)
        self._markers = []
        self._records_by_marker = {}

    def _create_popup_content(self, record: LocationRecord) -> str:
        """Create HTML popup content for a monastery marker."""
        name = html.escape(record.name)
        return f"""
        <div>
            <strong>{name}</strong><br>
            Sect: {html.escape(record.category)}<br>
            Location: {html.escape(record.region)}<br>
            <a href="{html.escape(detail_url(self.detail_page, record.name))}" target="_blank"
               style="color: #003366; font-weight: bold; display: block; margin-top: 5px;">View Details &rarr;</a>
            <a href="{satellite_url(record)}" target="_blank"
               style="color: #cc0000; font-weight: bold; display: block; margin-top: 5px;">
                View on Google Maps (Satellite) &rarr;
            </a>
        </div>
        """
