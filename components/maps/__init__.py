"""
Maps Component - Interactive monastery map.

The catalog of monasteries is filtered by sect, location and free text and
drawn as Folium markers with popups linking to the detail view and to
Google Maps satellite imagery.
"""

from .catalog import LocationCatalog, LocationRecord, MONASTERY_LOCATIONS, WILDCARD
from .filter_engine import FilterCriteria, FilterResult, filter_locations, search_locations
from .map_view import MapView
from .app_context import AppContext
from .maps_page import render_maps_page, get_app_context
from .detail_panel import MonasteryDetailsPanel

__all__ = [
    'LocationCatalog',
    'LocationRecord',
    'MONASTERY_LOCATIONS',
    'WILDCARD',
    'FilterCriteria',
    'FilterResult',
    'filter_locations',
    'search_locations',
    'MapView',
    'AppContext',
    'render_maps_page',
    'get_app_context',
    'MonasteryDetailsPanel'
]
