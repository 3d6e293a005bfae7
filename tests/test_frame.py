"""Tests for the Frame model."""

import pytest
from PySide6.QtCore import QRect

from tileset_editor.models.frame import Frame
from tileset_editor.utils.constants import DEFAULT_FRAME_DURATION


class TestFrame:
    """Tests for Frame geometry and duration."""

    def test_defaults(self):
        """A frame gets the default duration when none is given."""
        frame = Frame(x=16, y=32, size=16)

        assert frame.duration == DEFAULT_FRAME_DURATION
        assert frame.location == (16, 32)

    def test_sheet_rect_is_square_tile(self):
        frame = Frame(x=16, y=0, size=16)
        assert frame.sheet_rect == QRect(16, 0, 16, 16)

    def test_set_location_moves_origin_only(self):
        """Moving a frame keeps its size."""
        frame = Frame(x=0, y=0, size=16)

        assert frame.set_location(32, 16) is True
        assert frame.sheet_rect == QRect(32, 16, 16, 16)

    def test_set_location_same_is_noop(self):
        frame = Frame(x=8, y=8, size=16)
        assert frame.set_location(8, 8) is False
        assert frame.location == (8, 8)

    def test_zero_duration_is_valid(self):
        """Duration 0 is a static hold, not an error."""
        frame = Frame(x=0, y=0, size=16, duration=10)

        assert frame.set_duration(0) is True
        assert frame.duration == 0

    def test_set_duration_unchanged(self):
        frame = Frame(x=0, y=0, size=16, duration=5)
        assert frame.set_duration(5) is False

    @pytest.mark.parametrize("bad", [-1, 2.5, "3", True])
    def test_invalid_duration_rejected(self, bad):
        frame = Frame(x=0, y=0, size=16, duration=5)

        with pytest.raises(ValueError):
            frame.set_duration(bad)
        assert frame.duration == 5

    def test_non_positive_size_rejected(self):
        with pytest.raises(ValueError):
            Frame(x=0, y=0, size=0)

    def test_copy_is_independent(self):
        frame = Frame(x=16, y=16, size=16, duration=3)
        clone = frame.copy()

        assert clone == frame
        clone.set_location(0, 0)
        assert frame.location == (16, 16)


class TestFrameCutTile:
    """Tests for cropping a frame out of the sheet."""

    def test_cut_tile_matches_sheet_region(self, tileset):
        frame = Frame(x=16, y=16, size=16)
        image = frame.cut_tile(tileset.sheet)

        assert image.width() == 16
        assert image.height() == 16
        assert image.pixel(0, 0) == tileset.sheet.pixel(16, 16)
        assert image.pixel(15, 15) == tileset.sheet.pixel(31, 31)

    def test_cut_tile_follows_repositioning(self, tileset):
        """The crop is recomputed from the rectangle on every call."""
        frame = Frame(x=0, y=0, size=16)
        before = frame.cut_tile(tileset.sheet).pixel(0, 0)

        frame.set_location(48, 0)
        after = frame.cut_tile(tileset.sheet).pixel(0, 0)

        assert before == tileset.sheet.pixel(0, 0)
        assert after == tileset.sheet.pixel(48, 0)
        assert before != after

    def test_out_of_bounds_crop_is_tolerated(self, tileset):
        """A frame past the sheet edge yields a clipped image, not an error."""
        frame = Frame(x=56, y=24, size=16)
        image = frame.cut_tile(tileset.sheet)

        assert image.width() == 16
        assert image.height() == 16
        assert image.pixel(0, 0) == tileset.sheet.pixel(56, 24)
        # Uncovered area is transparent
        assert image.pixelColor(15, 15).alpha() == 0
