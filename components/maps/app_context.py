"""
Application context tying the catalog, map view and slideshow together.

One AppContext is kept per browser session; pages receive it instead of
reaching for module-level state.
"""

from typing import Optional
import logging

from components.config import SiteConfig
from components.gallery.slideshow import SlideShow
from .catalog import LocationCatalog
from .filter_engine import FilterCriteria, FilterResult, filter_locations, search_locations
from .map_view import MapView

logger = logging.getLogger(__name__)


class AppContext:
    """Owns the site's client-side state with an explicit lifecycle."""

    def __init__(self, config: SiteConfig, catalog: Optional[LocationCatalog] = None):
        self.config = config
        self.catalog = catalog or LocationCatalog()
        self.map_view = MapView(self.catalog, config.get_map_settings())
        self.slideshow = SlideShow.from_settings(config.get_slideshow_settings())
        self.last_result: Optional[FilterResult] = None
        self.initialized = False

    def initialize(self) -> None:
        """Build the map with the full catalog; resets any previous filter."""
        self.map_view.initialize()
        self.last_result = None
        self.initialized = True
        logger.info(f"Application context initialized with {len(self.catalog)} monasteries")

    def teardown(self) -> None:
        self.map_view.teardown()
        self.last_result = None
        self.initialized = False
        logger.info("Application context torn down")

    def apply_filter(self, criteria: FilterCriteria) -> FilterResult:
        """Filter the catalog and redraw the map with the matches."""
        if not self.initialized:
            self.initialize()
        result = filter_locations(self.catalog, criteria)
        self.map_view.render(result.records)
        self.last_result = result
        return result

    def search(self, criteria: FilterCriteria) -> FilterResult:
        if not self.initialized:
            self.initialize()
        result = search_locations(self.catalog, criteria)
        self.map_view.render(result.records)
        self.last_result = result
        return result
