"""Tests for grid cell lookup and cell sizing."""

import math

import pytest
from grid_cluster.core import GridConfig, GridConfigError, Point
from grid_cluster.core.grid import cell_corner, cell_index, side_width_for_resolution


class TestSideWidthForResolution:
    """Test resolution dependent cell sizing."""

    def test_doubles_until_minimum_pixel_size(self):
        """10 -> 20 -> 40 is the first width covering 30px at resolution 1."""
        assert side_width_for_resolution(1, 10, 30) == 40

    def test_small_resolution_keeps_base_width(self):
        """Test small resolution keeps base width."""
        assert side_width_for_resolution(0.1, 10, 30) == 10

    def test_exact_fit_does_not_double(self):
        """Test exact fit does not double."""
        assert side_width_for_resolution(1, 30, 30) == 30

    def test_monotone_powers_of_two(self):
        """Widths never shrink with resolution and stay base * 2**k."""
        resolutions = [0.01, 0.2, 0.5, 1, 1.5, 3, 10, 77.7, 1000]
        widths = [side_width_for_resolution(r, 10, 30) for r in resolutions]

        assert widths == sorted(widths)
        for width in widths:
            ratio = width / 10
            assert ratio.is_integer()
            k = int(ratio)
            assert k & (k - 1) == 0

    @pytest.mark.parametrize("resolution", [None, 0, -1, math.nan, math.inf, "abc"])
    def test_invalid_resolution_returns_none(self, resolution):
        """Test that invalid resolutions return None."""
        assert side_width_for_resolution(resolution, 10, 30) is None

    @pytest.mark.parametrize("base", [0, -5, math.nan])
    def test_invalid_base_width_raises(self, base):
        """Test invalid base width raises."""
        with pytest.raises(GridConfigError):
            side_width_for_resolution(1, base, 30)


class TestGridConfig:
    """Test configuration validation."""

    def test_defaults(self):
        """Test default values."""
        config = GridConfig(10)
        assert config.min_side_pixels == 30
        assert config.origin == (0.0, 0.0)

    def test_rejects_non_positive_base_width(self):
        """Test rejects non positive base width."""
        with pytest.raises(GridConfigError):
            GridConfig(0)
        with pytest.raises(GridConfigError):
            GridConfig(-1)

    def test_rejects_negative_min_pixels(self):
        """Test rejects negative min pixels."""
        with pytest.raises(GridConfigError):
            GridConfig(10, min_side_pixels=-1)

    def test_rejects_bad_origin(self):
        """Test rejects bad origin."""
        with pytest.raises(GridConfigError):
            GridConfig(10, origin=(0.0, math.inf))

    @pytest.mark.parametrize("origin", [None, 5, (1, 2, 3), ("a", 0), (0, None)])
    def test_rejects_malformed_origin(self, origin):
        """Test that malformed origins raise a configuration error."""
        with pytest.raises(GridConfigError):
            GridConfig(10, origin=origin)

    @pytest.mark.parametrize("min_side_pixels", [None, "30", math.nan])
    def test_rejects_non_numeric_min_pixels(self, min_side_pixels):
        """Test that non-numeric minimum pixel sizes raise a configuration error."""
        with pytest.raises(GridConfigError):
            GridConfig(10, min_side_pixels=min_side_pixels)

    def test_side_width_uses_config(self):
        """Test side width uses config."""
        config = GridConfig(10, min_side_pixels=15)
        assert config.side_width_for_resolution(1) == 20
        assert config.scale_factor(40) == 4


class TestCellCorner:
    """Test floored cell lookup."""

    def test_cell_center_maps_to_origin_cell(self):
        """Test cell center maps to origin cell."""
        origin = (5.0, -3.0)
        point = Point(1, origin[0] + 0.5 * 40, origin[1] + 0.5 * 40)
        assert cell_corner(point, 40, origin) == origin

    def test_just_below_boundary_stays_in_lower_cell(self):
        """Test just below boundary stays in lower cell."""
        assert cell_corner(Point(1, 39.999, 0), 40) == (0, 0)
        assert cell_corner(Point(1, 40, 0), 40) == (40, 0)

    def test_negative_coordinates_floor(self):
        """Test negative coordinates floor."""
        assert cell_corner(Point(1, -0.001, -0.001), 40) == (-40, -40)
        assert cell_corner(Point(1, -40, -40), 40) == (-40, -40)
        assert cell_corner(Point(1, -40.001, 5), 40) == (-80, 0)

    def test_cell_index(self):
        """Test integer cell indices."""
        assert cell_index(-1, -1, 10) == (-1, -1)
        assert cell_index(95, 5, 40) == (2, 0)
        assert cell_index(25, 25, 10, origin=(5, 5)) == (2, 2)
