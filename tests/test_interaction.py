"""Tests for the zoom-on-click / select-when-leaf policy."""

import pytest
from grid_cluster.core import MapView, Point, SelectGridCluster, ViewportLoadCoordinator

POINTS = [Point(1, 5, 5), Point(2, 95, 5)]


@pytest.fixture
def view():
    return MapView(center=(50.0, 50.0), zoom=0, max_resolution=1.0, size=(100, 100))


@pytest.fixture
def source(view):
    source = ViewportLoadCoordinator(base_side_width=10)
    source.set_points(POINTS)
    source.request_view(view.calculate_extent(), view.resolution)
    return source


class TestMapView:
    """Test the view model."""

    def test_resolution_halves_per_zoom(self, view):
        """Test resolution halves per zoom."""
        assert view.resolution == 1.0
        assert view.resolution_for_zoom(1) == 0.5
        assert view.resolution_for_zoom(3) == 0.125

    def test_calculate_extent(self, view):
        """Test the visible extent."""
        extent = view.calculate_extent()
        assert tuple(extent) == (0.0, 0.0, 100.0, 100.0)


class TestSelectGridCluster:
    """Test click handling."""

    def test_click_on_cluster_zooms_in(self, view, source):
        """Test click on cluster zooms in."""
        select = SelectGridCluster(view, source)
        cluster = source.get_feature_by_id("4_1")

        assert select.handle_click(cluster) is False

        assert view.zoom == 1
        assert view.center == (20.0, 20.0)
        assert len(view.animations) == 1
        assert view.animations[0].duration == 200
        assert select.selected == []

    def test_click_preloads_target_resolution(self, view, source):
        """Test click preloads target resolution."""
        select = SelectGridCluster(view, source)

        select.handle_click(source.get_feature_by_id("4_1"))

        # 0.5 units/px * 30px -> next power of two multiple of 10 is 20
        assert source.state.current_side_width == 20

    def test_click_without_animation(self, view, source):
        """Test click without animation."""
        select = SelectGridCluster(view, source, animate=False)

        select.handle_click(source.get_feature_by_id("4_2"))

        assert view.zoom == 1
        assert view.center == (100.0, 20.0)
        assert view.animations == []
        assert source.state.current_side_width == 40

    def test_click_on_leaf_selects(self, view):
        """Test click on leaf selects."""
        source = ViewportLoadCoordinator(base_side_width=10)
        source.set_points(POINTS)
        select = SelectGridCluster(view, source)
        first, second = source.get_feature_by_id(1), source.get_feature_by_id(2)

        assert select.handle_click(first) is True
        assert select.selected == [first]
        assert view.zoom == 0

        assert select.handle_click(second) is True
        assert select.selected == [second]

        assert select.handle_click(first, toggle=True) is True
        assert select.handle_click(second, toggle=True) is False
        assert select.selected == [first]

        select.clear_selection()
        assert select.selected == []

    def test_filter_blocks_selection(self, view):
        """Test filter blocks selection."""
        source = ViewportLoadCoordinator(base_side_width=10)
        source.set_points(POINTS)
        select = SelectGridCluster(view, source, filter=lambda record: record.id != 1)

        assert select.handle_click(source.get_feature_by_id(1)) is False
        assert select.handle_click(source.get_feature_by_id(2)) is True
        assert [record.id for record in select.selected] == [2]
