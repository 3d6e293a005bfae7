"""
Editing session for a single tileset.

TilesetEditor sits between an editor UI and the Tileset model. It tracks
whether the tileset has unsaved changes and emits Qt signals after every
mutation that actually changed something, so views can refresh.

Per-tile queries and setters here are forgiving: an out-of-range tile or
frame index yields an empty default ("" / 0 / None) or does nothing,
instead of raising. A view that is one repaint behind the model then
degrades quietly. The Tileset model itself is strict.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage, QPainter

from ..errors import NoPathError
from ..models.tile_properties import TileProperties
from ..models.tileset import Tileset
from ..utils.constants import DEFAULT_UPDATE_DELTA, UNTITLED_NAME

logger = logging.getLogger(__name__)


class TilesetEditor(QObject):
    """Dirty-tracking, signal-emitting wrapper around one Tileset."""

    # Emitted after any mutation that changed the tileset
    changed = Signal()
    # Emitted after add_tile() with the new tile's index
    tile_added = Signal(int)
    # Emitted when the unsaved-changes flag flips
    dirty_changed = Signal(bool)
    # Emitted after saving under a different path: (old_path, new_path)
    path_changed = Signal(str, str)
    # Emitted once the session has been closed
    closed = Signal(object)

    def __init__(self, tileset: Tileset, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._tileset = tileset
        self._dirty = False

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TilesetEditor":
        """Open a saved tileset. The session starts clean."""
        return cls(Tileset.load(path))

    @classmethod
    def create_new(cls, image_path: Union[str, Path], tile_size: int) -> "TilesetEditor":
        """Start a new tileset on a sheet image. The session starts dirty."""
        editor = cls(Tileset.create_new(image_path, tile_size))
        editor.dirty = True
        return editor

    # -- session state --------------------------------------------------

    @property
    def tileset(self) -> Tileset:
        return self._tileset

    @property
    def dirty(self) -> bool:
        return self._dirty

    @dirty.setter
    def dirty(self, value: bool) -> None:
        if value == self._dirty:
            return
        self._dirty = value
        self.dirty_changed.emit(value)

    def _mark_changed(self) -> None:
        self.dirty = True
        self.changed.emit()

    @property
    def name(self) -> str:
        """File name without extension, or "Untitled" if never saved."""
        if self._tileset.file_path is None:
            return UNTITLED_NAME
        return Path(self._tileset.file_path).stem

    @property
    def file_path(self) -> Optional[str]:
        path = self._tileset.file_path
        return str(path) if path is not None else None

    @property
    def sheet(self) -> QImage:
        return self._tileset.sheet

    @property
    def sheet_width(self) -> int:
        return self._tileset.sheet_width

    @property
    def sheet_height(self) -> int:
        return self._tileset.sheet_height

    @property
    def count(self) -> int:
        return len(self._tileset)

    @property
    def tile_size(self) -> int:
        return self._tileset.tile_size

    @property
    def property_names(self) -> List[str]:
        return self._tileset.property_names()

    def _valid_tile(self, tile_index: int) -> bool:
        return 0 <= tile_index < len(self._tileset)

    def _valid_frame(self, tile_index: int, frame: int) -> bool:
        return 0 <= frame < self.frame_count(tile_index)

    # -- tiles ----------------------------------------------------------

    def add_tile(self) -> int:
        index = self._tileset.add_tile()
        self._mark_changed()
        self.tile_added.emit(index)
        return index

    def tile_name(self, tile_index: int) -> str:
        if not self._valid_tile(tile_index):
            return ""
        return self._tileset.tile_name(tile_index)

    def set_tile_name(self, tile_index: int, name: str) -> None:
        if not self._valid_tile(tile_index):
            return
        if self._tileset.set_tile_name(tile_index, name):
            self._mark_changed()

    def draw_tile(self, tile_index: int, painter: QPainter, x: int, y: int) -> None:
        self._tileset.draw(tile_index, painter, x, y)

    # -- frames ---------------------------------------------------------

    def frame_count(self, tile_index: int) -> int:
        if not self._valid_tile(tile_index):
            return 0
        return self._tileset.frame_count(tile_index)

    def add_frame(self, tile_index: int) -> None:
        if not self._valid_tile(tile_index):
            return
        self._tileset.add_frame(tile_index)
        self._mark_changed()

    def frame_duration(self, tile_index: int, frame: int) -> int:
        if not self._valid_frame(tile_index, frame):
            return 0
        return self._tileset.frame_duration(tile_index, frame)

    def set_frame_duration(self, tile_index: int, frame: int, duration: int) -> None:
        """Raises ValueError for a negative duration."""
        if not self._valid_frame(tile_index, frame):
            return
        if self._tileset.set_frame_duration(tile_index, frame, duration):
            self._mark_changed()

    def frame_position(self, tile_index: int, frame: int) -> Optional[Tuple[int, int]]:
        if not self._valid_frame(tile_index, frame):
            return None
        return self._tileset.frame_position(tile_index, frame)

    def set_frame_position(self, tile_index: int, frame: int, x: int, y: int) -> None:
        if not self._valid_frame(tile_index, frame):
            return
        if self._tileset.set_frame_position(tile_index, frame, x, y):
            self._mark_changed()

    def tile_frame(self, tile_index: int, frame: int) -> Optional[QImage]:
        if not self._valid_frame(tile_index, frame):
            return None
        return self._tileset.frame_image(tile_index, frame)

    # -- properties -----------------------------------------------------

    def tile_properties(self, tile_index: int) -> str:
        """Name of the tile's property set, or "" if it has none."""
        if not self._valid_tile(tile_index):
            return ""
        properties = self._tileset.tile_properties(tile_index)
        return properties.name if properties is not None else ""

    def get_properties(self, name: str) -> TileProperties:
        return self._tileset.get_properties(name)

    def add_properties(self, properties: TileProperties) -> None:
        self._tileset.add_properties(properties)
        self._mark_changed()

    def set_properties(self, tile_index: int, name: Optional[str]) -> None:
        """
        Bind a tile to a registered property set.

        An empty name, as reported by tile_properties() for an unbound
        tile, unbinds it like None.

        Raises:
            NotFoundError: If name is not registered; the tile is unchanged.
        """
        if not self._valid_tile(tile_index):
            return
        if name == "":
            name = None
        if self._tileset.set_tile_properties(tile_index, name):
            self._mark_changed()

    # -- animation ------------------------------------------------------

    def play(self) -> None:
        self._tileset.play()

    def stop(self) -> None:
        self._tileset.stop()

    def update(self, delta_time: int = DEFAULT_UPDATE_DELTA) -> None:
        self._tileset.update(delta_time)

    # -- lifecycle ------------------------------------------------------

    def save(self, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Save the tileset, optionally under a new path.

        Returns:
            False if no path was given and the tileset has never been
            saved; the caller should ask for one and call save(path).

        Raises:
            NotWritableError: If the file cannot be written.
        """
        old_path = self.file_path
        try:
            self._tileset.save(path)
        except NoPathError:
            logger.debug("Save of '%s' needs a path", self.name)
            return False

        new_path = self.file_path
        if old_path != new_path:
            self.path_changed.emit(old_path or "", new_path)
        self.dirty = False
        return True

    def close(self, save_changes: Optional[bool] = None) -> bool:
        """
        Close the session.

        Args:
            save_changes: What to do with unsaved changes. True saves first,
                False discards them, None cancels the close while there
                are any.

        Returns:
            True if the session was closed.
        """
        if self._dirty:
            if save_changes is None:
                return False
            if save_changes and not self.save():
                return False
        logger.debug("Closed tileset '%s'", self.name)
        self.closed.emit(self)
        return True
