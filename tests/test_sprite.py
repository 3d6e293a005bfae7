"""Tests for Sprite playback and frame management."""

import pytest

from tileset_editor.errors import TileIndexError
from tileset_editor.models.frame import Frame
from tileset_editor.models.sprite import Sprite
from tileset_editor.utils.constants import DEFAULT_FRAME_DURATION


def make_sprite(*durations: int) -> Sprite:
    return Sprite([Frame(x=16 * i, y=0, size=16, duration=d) for i, d in enumerate(durations)])


class TestSpriteFrames:
    """Tests for frame sequence management."""

    def test_single_frame_default(self):
        sprite = Sprite.single(16)

        assert len(sprite) == 1
        assert sprite[0].location == (0, 0)
        assert sprite[0].size == 16
        assert sprite.index == 0
        assert not sprite.is_playing

    def test_empty_sprite_rejected(self):
        with pytest.raises(ValueError):
            Sprite([])

    def test_add_frame_clones_last_rectangle(self):
        """A new frame starts aligned with its predecessor."""
        sprite = make_sprite(10, 20)
        sprite[1].set_location(32, 16)

        frame = sprite.add_frame()

        assert len(sprite) == 3
        assert frame.sheet_rect == sprite[1].sheet_rect
        assert frame.duration == DEFAULT_FRAME_DURATION
        assert frame is not sprite[1]

    def test_add_frame_keeps_play_index(self):
        sprite = make_sprite(10, 10)
        sprite.play()
        sprite.update(10)
        assert sprite.index == 1

        sprite.add_frame()
        assert sprite.index == 1

    def test_frame_index_out_of_range(self):
        sprite = make_sprite(1)
        with pytest.raises(TileIndexError):
            sprite[1]
        with pytest.raises(TileIndexError):
            sprite[-1]

    def test_iteration_in_order(self):
        sprite = make_sprite(1, 2, 3)
        assert [f.duration for f in sprite] == [1, 2, 3]


class TestSpritePlayback:
    """Tests for the play/stop/update state machine."""

    def test_update_while_stopped_does_nothing(self):
        sprite = make_sprite(10, 10)
        sprite.update(100)

        assert sprite.index == 0
        assert sprite.elapsed == 0

    def test_play_and_stop_are_idempotent(self):
        sprite = make_sprite(10, 10)
        sprite.play()
        sprite.play()
        assert sprite.is_playing

        sprite.stop()
        sprite.stop()
        assert not sprite.is_playing

    def test_stop_rewinds(self):
        sprite = make_sprite(10, 10)
        sprite.play()
        sprite.update(15)
        assert (sprite.index, sprite.elapsed) == (1, 5)

        sprite.stop()
        assert (sprite.index, sprite.elapsed) == (0, 0)

    def test_advance_with_carry_and_wrap(self):
        """Durations [100, 50]: 120 lands on frame 1, 40 more wraps to 0."""
        sprite = make_sprite(100, 50)
        sprite.play()

        sprite.update(120)
        assert sprite.index == 1
        assert sprite.elapsed == 20

        sprite.update(40)
        assert sprite.index == 0
        assert sprite.elapsed == 10

    def test_large_delta_skips_several_frames(self):
        sprite = make_sprite(10, 10, 10)
        sprite.play()

        sprite.update(75)

        # 75 = 7 full frames (two loops plus one) + 5
        assert sprite.index == 1
        assert sprite.elapsed == 5

    def test_huge_delta_wraps_whole_cycles(self):
        """Full loops are skipped arithmetically instead of frame by frame."""
        sprite = make_sprite(1, 1, 1)
        sprite.play()

        sprite.update(10 ** 12)

        assert sprite.index == 10 ** 12 % 3
        assert sprite.elapsed == 0

    def test_huge_delta_from_mid_frame(self):
        sprite = make_sprite(3, 5)
        sprite.play()
        sprite.update(4)
        assert (sprite.index, sprite.elapsed) == (1, 1)

        # Whole cycles of 8 plus 4 more: 1+4 = 5 finishes frame 1
        sprite.update(8 * 10 ** 9 + 4)

        assert sprite.index == 0
        assert sprite.elapsed == 0

    @pytest.mark.parametrize("delta", [1, 1000, 10 ** 9])
    def test_zero_duration_frame_holds(self, delta):
        """A frame with duration 0 never advances while active."""
        sprite = make_sprite(0, 10)
        sprite.play()

        sprite.update(delta)

        assert sprite.index == 0
        assert sprite.elapsed == 0

    def test_playback_parks_on_hold_frame(self):
        sprite = make_sprite(10, 0, 10)
        sprite.play()

        sprite.update(25)
        assert sprite.index == 1

        sprite.update(500)
        assert sprite.index == 1

    def test_default_update_delta_is_one_tick(self):
        sprite = make_sprite(2, 2)
        sprite.play()

        sprite.update()
        assert sprite.index == 0
        sprite.update()
        assert sprite.index == 1

    def test_negative_delta_rejected(self):
        sprite = make_sprite(10)
        sprite.play()
        with pytest.raises(ValueError):
            sprite.update(-1)

    def test_current_frame_tracks_index(self):
        sprite = make_sprite(5, 5)
        sprite.play()
        sprite.update(5)

        assert sprite.current_frame is sprite[1]
