"""
Sprite model: the looping frame sequence that animates a tile.

Playback is advanced only by update(); there is no internal timer. A
sprite is a pure function of the deltas fed into it.
"""

from typing import Iterator, List

from ..errors import TileIndexError
from ..utils.constants import DEFAULT_FRAME_DURATION, DEFAULT_UPDATE_DELTA
from .frame import Frame


class Sprite:
    """
    An ordered, looping sequence of frames with play/stop semantics.

    A sprite always holds at least one frame, and its playback index is
    always a valid frame index.
    """

    def __init__(self, frames: List[Frame]):
        if not frames:
            raise ValueError("A sprite needs at least one frame")
        self._frames: List[Frame] = list(frames)
        self._index = 0
        self._elapsed = 0
        self._playing = False

    @classmethod
    def single(cls, size: int, x: int = 0, y: int = 0) -> "Sprite":
        """Create a sprite with one frame at (x, y) and the default duration."""
        return cls([Frame(x=x, y=y, size=size, duration=DEFAULT_FRAME_DURATION)])

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def __getitem__(self, index: int) -> Frame:
        if not 0 <= index < len(self._frames):
            raise TileIndexError(
                f"Frame index {index} out of range (0..{len(self._frames) - 1})"
            )
        return self._frames[index]

    @property
    def frames(self) -> List[Frame]:
        """A copy of the frame list."""
        return list(self._frames)

    @property
    def index(self) -> int:
        """Index of the frame currently shown."""
        return self._index

    @property
    def elapsed(self) -> int:
        """Time accumulated on the current frame."""
        return self._elapsed

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def current_frame(self) -> Frame:
        return self._frames[self._index]

    def add_frame(self) -> Frame:
        """
        Append a frame aligned with the current last frame.

        The new frame copies the last frame's rectangle and gets the default
        duration. The playback position is not changed.
        """
        last = self._frames[-1]
        frame = last.copy()
        frame.duration = DEFAULT_FRAME_DURATION
        self._frames.append(frame)
        return frame

    def play(self) -> None:
        self._playing = True

    def stop(self) -> None:
        """Stop playback and rewind to the first frame."""
        self._playing = False
        self._index = 0
        self._elapsed = 0

    def update(self, delta_time: int = DEFAULT_UPDATE_DELTA) -> None:
        """
        Advance playback by delta_time units.

        While playing, time accumulates on the current frame. Each time it
        reaches the frame's duration that duration is consumed and the next
        frame becomes current, wrapping after the last one. A frame with
        duration 0 is a hold: playback parks on it and its time is discarded.
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must be non-negative, got {delta_time}")
        if not self._playing:
            return

        self._elapsed += delta_time
        durations = [frame.duration for frame in self._frames]
        if all(d > 0 for d in durations):
            # A full cycle from any frame lands back on that frame
            self._elapsed %= sum(durations)
        while True:
            duration = self._frames[self._index].duration
            if duration <= 0:
                self._elapsed = 0
                return
            if self._elapsed < duration:
                return
            self._elapsed -= duration
            self._index = (self._index + 1) % len(self._frames)
