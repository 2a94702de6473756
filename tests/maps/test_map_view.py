"""
Tests for MapView rendering.
"""

import folium
import pytest

from components.maps.map_view import MapView, detail_url, satellite_url


class TestMapView:
    """Test MapView lifecycle and marker management."""

    def setup_method(self):
        self.settings = {
            'default_center': [27.33, 88.62],
            'default_zoom': 10,
            'tile_url': 'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png',
            'tile_attribution': 'OpenStreetMap contributors',
            'detail_page': 'monastery_detail.html'
        }

    def _marker_children(self, view):
        return [child for child in view.marker_layer._children.values()
                if isinstance(child, folium.Marker)]

    def test_initialize_creates_viewport_with_defaults(self, catalog):
        view = MapView(catalog, self.settings)
        map_obj = view.initialize()

        assert isinstance(map_obj, folium.Map)
        assert map_obj.location == [27.33, 88.62]
        assert view.viewport is map_obj

    def test_initialize_attaches_tiles_and_marker_layer(self, catalog):
        view = MapView(catalog, self.settings)
        map_obj = view.initialize()

        children = list(map_obj._children.values())
        assert any(isinstance(child, folium.TileLayer) for child in children)
        assert view.marker_layer in children

    def test_initialize_renders_full_catalog(self, catalog):
        view = MapView(catalog, self.settings)
        view.initialize()

        assert len(view.markers) == 9
        assert view.rendered_records() == list(catalog.records)

    def test_reinitialize_replaces_viewport(self, catalog):
        view = MapView(catalog, self.settings)
        first = view.initialize()
        second = view.initialize()

        assert first is not second
        assert view.viewport is second
        assert len(view.markers) == 9
        assert len(self._marker_children(view)) == 9

    def test_render_leaves_exactly_one_marker_per_record(self, catalog, small_catalog):
        view = MapView(catalog, self.settings)
        view.initialize()

        view.render(small_catalog.records[:2])

        markers = self._marker_children(view)
        assert len(markers) == 2
        assert len(view.markers) == 2
        assert [view.record_for(m).name for m in markers] == ["Alpha Gompa", "Beta Gompa"]

    def test_render_empty_clears_all_markers(self, catalog):
        view = MapView(catalog, self.settings)
        view.initialize()

        view.render([])

        assert view.markers == []
        assert self._marker_children(view) == []

    def test_markers_placed_at_record_coordinates(self, small_catalog):
        view = MapView(small_catalog, self.settings)
        view.initialize()

        for marker in view.markers:
            record = view.record_for(marker)
            assert marker.location == [record.lat, record.lng]

    def test_side_table_forgets_previous_markers(self, catalog, small_catalog):
        view = MapView(catalog, self.settings)
        view.initialize()
        old_marker = view.markers[0]

        view.render(small_catalog.records)

        assert view.record_for(old_marker) is None
        assert 'monastery' not in old_marker.options

    def test_render_before_initialize_raises(self, catalog):
        view = MapView(catalog, self.settings)
        with pytest.raises(RuntimeError):
            view.render(catalog.records)

    def test_teardown(self, catalog):
        view = MapView(catalog, self.settings)
        view.initialize()
        view.teardown()

        assert not view.is_initialized
        assert view.markers == []
        with pytest.raises(RuntimeError):
            _ = view.viewport

    def test_popup_content(self, catalog):
        view = MapView(catalog, self.settings)
        record = catalog.find("Lingdum Monastery (Ranka)")

        content = view._create_popup_content(record)

        assert "<strong>Lingdum Monastery (Ranka)</strong>" in content
        assert "Sect: Kagyu" in content
        assert "Location: East Sikkim" in content
        assert 'href="monastery_detail.html?name=Lingdum%20Monastery%20(Ranka)"' in content
        assert "https://www.google.com/maps/@27.3005,88.571,18z/data=!3m1!1e3" in content


class TestLinks:

    def test_detail_url_percent_encodes_name(self):
        assert detail_url("/", "Do Drul Chorten") == "/?name=Do%20Drul%20Chorten"
        assert detail_url("detail", "A&B/C") == "detail?name=A%26B%2FC"

    def test_satellite_url(self, catalog):
        assert satellite_url(catalog[0]) == \
            "https://www.google.com/maps/@27.2753,88.5447,18z/data=!3m1!1e3"
