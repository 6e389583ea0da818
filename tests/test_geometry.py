"""
Tests for geometry calculations.
"""
import math
import pytest

from transformkit.core.interfaces import MasterDim
from transformkit.image.geometry import (
    reproportion,
    calc_aspect_ratio,
    calc_crop_coords,
    CROP_POSITIONS,
)


class TestReproportion:
    """Tests for reproportion()."""

    def test_width_master_inferred(self):
        assert reproportion(800, 800, 4000, 3000) == (800, 600, MasterDim.WIDTH)

    def test_height_master_inferred(self):
        assert reproportion(800, 100, 4000, 3000) == (134, 100, MasterDim.HEIGHT)

    def test_equal_ratio_prefers_height(self):
        assert reproportion(800, 600, 4000, 3000) == (800, 600, MasterDim.HEIGHT)

    def test_zero_width_uses_height(self):
        assert reproportion(0, 300, 4000, 3000) == (400, 300, MasterDim.HEIGHT)

    def test_zero_height_uses_width(self):
        assert reproportion(500, 0, 4000, 3000) == (500, 375, MasterDim.WIDTH)

    def test_missing_width_uses_height(self):
        assert reproportion(None, 300, 4000, 3000) == (400, 300, MasterDim.HEIGHT)

    def test_explicit_master(self):
        assert reproportion(800, 300, 4000, 3000, "height") == (400, 300, MasterDim.HEIGHT)
        assert reproportion(800, 300, 4000, 3000, MasterDim.WIDTH) == (800, 600, MasterDim.WIDTH)

    def test_unknown_master_is_inferred(self):
        assert reproportion(800, 800, 4000, 3000, "diagonal") == (800, 600, MasterDim.WIDTH)

    def test_rounds_up(self):
        assert reproportion(100, 0, 3, 2) == (100, 67, MasterDim.WIDTH)

    def test_digit_strings_are_accepted(self):
        assert reproportion("800", "0", 4000, 3000) == (800, 600, MasterDim.WIDTH)

    @pytest.mark.parametrize("width, height, orig_width, orig_height, master", [
        (0, 0, 4000, 3000, MasterDim.AUTO),
        (None, None, 4000, 3000, MasterDim.AUTO),
        (-5, -5, 4000, 3000, MasterDim.AUTO),
        (800, 600, 0, 3000, MasterDim.AUTO),
        (800, 600, 4000, 0, MasterDim.AUTO),
        (800, 600, "wide", 3000, MasterDim.AUTO),
        (0, 300, 4000, 3000, MasterDim.WIDTH),
        (800, 0, 4000, 3000, MasterDim.HEIGHT),
    ])
    def test_degenerate_input_is_unchanged(self, width, height, orig_width, orig_height, master):
        assert reproportion(width, height, orig_width, orig_height, master) == (width, height, master)

    @pytest.mark.parametrize("target, source", [
        ((800, 800), (4000, 3000)),
        ((640, 100), (1920, 1080)),
        ((333, 777), (1001, 997)),
        ((1, 1), (7, 3)),
        ((250, 0), (3, 1000)),
    ])
    def test_derived_axis_is_exact_ceiling(self, target, source):
        width, height, master = reproportion(*target, *source)
        orig_width, orig_height = source

        if master is MasterDim.WIDTH:
            assert width == target[0]
            assert height == math.ceil(width * orig_height / orig_width)
        else:
            assert height == target[1]
            assert width == math.ceil(orig_width * height / orig_height)

    @pytest.mark.parametrize("target", [(800, 800), (800, 100), (0, 300), (333, 0)])
    def test_idempotent(self, target):
        first = reproportion(*target, 4000, 3000)
        second = reproportion(first[0], first[1], 4000, 3000, first[2])
        assert second == first


class TestCalcAspectRatio:
    """Tests for calc_aspect_ratio()."""

    def test_without_height_scales_by_width(self):
        assert calc_aspect_ratio(800, None, 4000, 3000) == (800, 600)

    def test_width_is_more_constraining(self):
        assert calc_aspect_ratio(200, 200, 4000, 3000) == (200, 150)

    def test_height_is_more_constraining(self):
        assert calc_aspect_ratio(300, 100, 4000, 3000) == (133, 100)

    def test_truncates(self):
        assert calc_aspect_ratio(100, None, 3, 2) == (100, 66)

    def test_zero_source_does_not_raise(self):
        assert calc_aspect_ratio(100, None, 0, 0) == (100, 0)


class TestCalcCropCoords:
    """Tests for calc_crop_coords()."""

    @pytest.mark.parametrize("position, expected", [
        ("top-left", (0, 0)),
        ("top", (1600, 0)),
        ("top-right", (3200, 0)),
        ("left", (0, 1200)),
        ("center", (1600, 1200)),
        ("right", (3200, 1200)),
        ("bottom-left", (0, 2400)),
        ("bottom", (1600, 2400)),
        ("bottom-right", (3200, 2400)),
    ])
    def test_positions(self, position, expected):
        assert calc_crop_coords(800, 600, 4000, 3000, position) == expected

    def test_all_positions_listed(self):
        assert len(CROP_POSITIONS) == 9

    def test_case_insensitive(self):
        assert calc_crop_coords(800, 600, 4000, 3000, "Bottom-Right") == (3200, 2400)

    def test_unknown_position_is_origin(self):
        assert calc_crop_coords(800, 600, 4000, 3000, "middle") == (0, 0)

    def test_center_rounds_down(self):
        assert calc_crop_coords(3, 4, 10, 11, "center") == (3, 3)

    @pytest.mark.parametrize("crop, source", [((1, 1), (2, 2)), ((5, 7), (11, 13)), ((100, 100), (100, 100))])
    def test_center_is_floor_of_half(self, crop, source):
        x, y = calc_crop_coords(*crop, *source)
        assert x == math.floor((source[0] - crop[0]) / 2)
        assert y == math.floor((source[1] - crop[1]) / 2)
