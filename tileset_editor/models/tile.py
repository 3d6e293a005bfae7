"""
Tile model: a named slot owning an animated sprite.

A tile refers to its property set by name. The name is a key into the
owning tileset's registry, not an owning link.
"""

from dataclasses import dataclass
from typing import Optional

from PySide6.QtGui import QImage, QPainter

from ..services.sheet_image import draw_image_at
from .sprite import Sprite


@dataclass
class Tile:
    """A tile in a tileset: display name, sprite and property-set key."""
    # Display label (not required to be unique)
    name: str

    # Animation owned by this tile
    sprite: Sprite

    # Registry key of the tile's property set (None = no properties)
    properties_name: Optional[str] = None

    @classmethod
    def create(cls, tile_size: int) -> "Tile":
        """A new unnamed tile showing the sheet origin, with no properties."""
        return cls(name="", sprite=Sprite.single(tile_size))

    @property
    def frame_count(self) -> int:
        return len(self.sprite)

    def current_image(self, sheet: QImage) -> QImage:
        """The sprite's current frame cut from the sheet."""
        return self.sprite.current_frame.cut_tile(sheet)

    def draw(self, painter: QPainter, sheet: QImage, x: int, y: int) -> None:
        """Draw the current frame with its top-left corner at (x, y)."""
        draw_image_at(painter, self.current_image(sheet), x, y)
