"""
Tests for the AppContext lifecycle and the filter -> redraw flow.
"""

from components.maps.app_context import AppContext
from components.maps.filter_engine import FilterCriteria


class TestAppContext:
    """Test cases for AppContext."""

    def test_initialize_draws_full_catalog_without_feedback(self, site_config):
        context = AppContext(site_config)
        context.initialize()

        assert context.initialized
        assert len(context.map_view.markers) == 9
        assert context.last_result is None

    def test_apply_filter_redraws_markers(self, site_config):
        context = AppContext(site_config)
        context.initialize()

        result = context.apply_filter(FilterCriteria(category="Nyingma"))

        assert result.count == 6
        assert context.last_result is result
        assert [r.name for r in context.map_view.rendered_records()] == list(result.names)

    def test_empty_result_is_distinct_from_no_filter(self, site_config):
        context = AppContext(site_config)
        context.initialize()
        assert context.last_result is None

        result = context.apply_filter(FilterCriteria(search_text="zzz"))

        assert context.last_result is not None
        assert result.count == 0
        assert context.map_view.markers == []
        assert result.feedback == "Found 0 monasteries matching your criteria."

    def test_search_uses_filter_semantics(self, site_config):
        context = AppContext(site_config)
        result = context.search(FilterCriteria(search_text="ranka"))

        assert context.initialized
        assert result.names == ("Lingdum Monastery (Ranka)",)
        assert len(context.map_view.markers) == 1

    def test_teardown_and_reinitialize(self, site_config):
        context = AppContext(site_config)
        context.initialize()
        context.apply_filter(FilterCriteria(region="West Sikkim"))

        context.teardown()
        assert not context.initialized
        assert context.last_result is None
        assert not context.map_view.is_initialized

        context.initialize()
        assert len(context.map_view.markers) == 9

    def test_slideshow_built_from_config(self, site_config):
        context = AppContext(site_config)

        assert context.slideshow.count == 4
        assert context.slideshow.interval_seconds == 5
        assert context.slideshow.active_slide.caption == "Rumtek Monastery"
