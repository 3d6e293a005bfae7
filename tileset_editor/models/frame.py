"""
Frame model: one timed, square crop of the tileset sheet.

The sheet rectangle is the only authoritative state. The cropped image is
cut from the live sheet every time it is requested.
"""

from dataclasses import dataclass
from typing import Tuple

from PySide6.QtCore import QRect
from PySide6.QtGui import QImage

from ..services.sheet_image import crop_region
from ..utils.constants import DEFAULT_FRAME_DURATION


def _check_duration(duration: int) -> int:
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ValueError(f"Frame duration must be an integer, got {duration!r}")
    if duration < 0:
        raise ValueError(f"Frame duration must be non-negative, got {duration}")
    return duration


@dataclass
class Frame:
    """
    A single animation frame of a tile.

    The frame is always size × size pixels, where size is the owning
    tileset's tile size. Moving a frame changes its origin only.
    """
    # Top-left corner on the sheet (pixels)
    x: int
    y: int

    # Edge length of the square crop, equal to the tileset's tile size
    size: int

    # Time units shown before advancing (0 = hold indefinitely)
    duration: int = DEFAULT_FRAME_DURATION

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"Frame size must be positive, got {self.size}")
        _check_duration(self.duration)

    @property
    def location(self) -> Tuple[int, int]:
        """Origin of the frame on the sheet."""
        return (self.x, self.y)

    @property
    def sheet_rect(self) -> QRect:
        """The crop rectangle on the sheet."""
        return QRect(self.x, self.y, self.size, self.size)

    def set_location(self, x: int, y: int) -> bool:
        """
        Move the frame's origin on the sheet.

        Returns:
            True if the origin changed, False if it was already (x, y).
        """
        if (x, y) == (self.x, self.y):
            return False
        self.x = x
        self.y = y
        return True

    def set_duration(self, duration: int) -> bool:
        """
        Set how long this frame is shown.

        Returns:
            True if the duration changed.

        Raises:
            ValueError: If duration is negative or not an integer.
        """
        _check_duration(duration)
        if duration == self.duration:
            return False
        self.duration = duration
        return True

    def cut_tile(self, sheet: QImage) -> QImage:
        """Crop this frame out of the given sheet."""
        return crop_region(sheet, self.sheet_rect)

    def copy(self) -> "Frame":
        return Frame(x=self.x, y=self.y, size=self.size, duration=self.duration)
