"""
Tileset model: the sheet image, its tiles and their shared property sets.

The tileset is the single source of truth for the tile/sprite/property
graph. Index arguments are checked strictly here and raise TileIndexError;
the editing session layered on top decides how forgiving to be.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple, Union

from PySide6.QtGui import QImage, QPainter

from ..errors import NoPathError, TileIndexError
from ..services.sheet_image import load_image
from ..utils.constants import DEFAULT_UPDATE_DELTA
from .frame import Frame
from .tile import Tile
from .tile_properties import PropertiesRegistry, TileProperties

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Tileset:
    """
    An ordered collection of tiles cut from one sheet image.

    Attributes:
        sheet: The sheet image shared read-only by every frame.
        sheet_path: Absolute path the sheet was loaded from, if any.
        tile_size: Edge length of every tile and frame, fixed for life.
        tiles: Tiles in index (and serialization) order.
        properties: Registry of named property sets.
        file_path: Where the tileset was last loaded from or saved to.
    """

    def __init__(
        self,
        sheet: QImage,
        tile_size: int,
        sheet_path: Optional[PathLike] = None,
    ):
        if tile_size <= 0:
            raise ValueError(f"Tile size must be positive, got {tile_size}")
        self.sheet = sheet
        self.sheet_path: Optional[Path] = Path(sheet_path).absolute() if sheet_path else None
        self._tile_size = tile_size
        self.tiles: List[Tile] = []
        self.properties = PropertiesRegistry()
        self.file_path: Optional[Path] = None

    # -- construction ---------------------------------------------------

    @classmethod
    def load(cls, path: PathLike) -> "Tileset":
        """
        Load a tileset document.

        Raises:
            NotFoundError: If the document or its sheet image is missing.
            FormatError: If the document is malformed.
            ImageLoadError: If the sheet image cannot be decoded.
        """
        from ..services.tileset_serializer import load_tileset
        return load_tileset(path)

    @classmethod
    def create_new(cls, image_path: PathLike, tile_size: int) -> "Tileset":
        """
        Start a new, never-saved tileset on the given sheet image.

        Raises:
            NotFoundError: If the image file is missing.
            ImageLoadError: If the image cannot be decoded.
            ValueError: If tile_size is not positive.
        """
        if tile_size <= 0:
            raise ValueError(f"Tile size must be positive, got {tile_size}")
        sheet = load_image(image_path)
        logger.info("Created new tileset on %s with tile size %d", image_path, tile_size)
        return cls(sheet, tile_size, sheet_path=image_path)

    # -- container protocol ---------------------------------------------

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(list(self.tiles))

    def __getitem__(self, index: int) -> Tile:
        return self._tile(index)

    @property
    def tile_size(self) -> int:
        return self._tile_size

    @property
    def sheet_width(self) -> int:
        return self.sheet.width()

    @property
    def sheet_height(self) -> int:
        return self.sheet.height()

    def _tile(self, index: int) -> Tile:
        if not 0 <= index < len(self.tiles):
            raise TileIndexError(f"Tile index {index} out of range (count {len(self.tiles)})")
        return self.tiles[index]

    def _frame(self, tile_index: int, frame_index: int) -> Frame:
        return self._tile(tile_index).sprite[frame_index]

    # -- tiles ----------------------------------------------------------

    def add_tile(self) -> int:
        """Append a default tile and return its index."""
        self.tiles.append(Tile.create(self._tile_size))
        index = len(self.tiles) - 1
        logger.debug("Added tile %d", index)
        return index

    def tile_name(self, tile_index: int) -> str:
        return self._tile(tile_index).name

    def set_tile_name(self, tile_index: int, name: str) -> bool:
        """Rename a tile. Returns False if the name was unchanged."""
        tile = self._tile(tile_index)
        if tile.name == name:
            return False
        tile.name = name
        return True

    def for_each_tile(self, func: Callable[[Tile], None]) -> None:
        """Apply func to every tile in index order."""
        for tile in list(self.tiles):
            func(tile)

    def draw(self, tile_index: int, painter: QPainter, x: int, y: int) -> None:
        """
        Draw a tile's current frame at (x, y).

        An out-of-range index draws nothing; a view may briefly ask for a
        tile the model no longer agrees exists.
        """
        if not 0 <= tile_index < len(self.tiles):
            return
        self.tiles[tile_index].draw(painter, self.sheet, x, y)

    # -- frames ---------------------------------------------------------

    def frame_count(self, tile_index: int) -> int:
        return len(self._tile(tile_index).sprite)

    def add_frame(self, tile_index: int) -> int:
        """Append a frame to a tile's sprite; returns the new frame count."""
        sprite = self._tile(tile_index).sprite
        sprite.add_frame()
        return len(sprite)

    def frame_duration(self, tile_index: int, frame_index: int) -> int:
        return self._frame(tile_index, frame_index).duration

    def set_frame_duration(self, tile_index: int, frame_index: int, duration: int) -> bool:
        return self._frame(tile_index, frame_index).set_duration(duration)

    def frame_position(self, tile_index: int, frame_index: int) -> Tuple[int, int]:
        return self._frame(tile_index, frame_index).location

    def set_frame_position(self, tile_index: int, frame_index: int, x: int, y: int) -> bool:
        """
        Move a frame's origin on the sheet. The size stays tile_size.

        Returns:
            False if the frame was already at (x, y).
        """
        return self._frame(tile_index, frame_index).set_location(x, y)

    def frame_image(self, tile_index: int, frame_index: int) -> QImage:
        """The frame's region cut from the current sheet."""
        return self._frame(tile_index, frame_index).cut_tile(self.sheet)

    # -- properties -----------------------------------------------------

    def add_properties(self, properties: TileProperties) -> None:
        """Register a property set. Raises DuplicateNameError on collision."""
        self.properties.add(properties)

    def get_properties(self, name: str) -> TileProperties:
        """Raises NotFoundError for unknown names."""
        return self.properties.get(name)

    def property_names(self) -> List[str]:
        return self.properties.names()

    def tile_properties(self, tile_index: int) -> Optional[TileProperties]:
        """The property set bound to a tile, or None."""
        name = self._tile(tile_index).properties_name
        return self.properties.get(name) if name is not None else None

    def set_tile_properties(self, tile_index: int, name: Optional[str]) -> bool:
        """
        Bind a tile to the registered property set called name.

        Passing None unbinds the tile.

        Returns:
            False if the tile was already bound to that name.

        Raises:
            TileIndexError: If tile_index is out of range.
            NotFoundError: If name is not registered. The tile keeps its
                previous binding.
        """
        tile = self._tile(tile_index)
        if name is not None:
            self.properties.get(name)
        if tile.properties_name == name:
            return False
        tile.properties_name = name
        return True

    # -- animation ------------------------------------------------------

    def play(self) -> None:
        self.for_each_tile(lambda tile: tile.sprite.play())

    def stop(self) -> None:
        self.for_each_tile(lambda tile: tile.sprite.stop())

    def update(self, delta_time: int = DEFAULT_UPDATE_DELTA) -> None:
        self.for_each_tile(lambda tile: tile.sprite.update(delta_time))

    # -- persistence ----------------------------------------------------

    def save(self, path: Optional[PathLike] = None) -> Path:
        """
        Write the tileset to path, or to file_path when path is omitted.

        The previous file is replaced atomically; on failure it is left as
        it was.

        Returns:
            The path written to, which becomes the new file_path.

        Raises:
            NoPathError: If no path is given and none is known.
            NotWritableError: If the file cannot be written.
        """
        from ..services.tileset_serializer import save_tileset

        target = Path(path) if path is not None else self.file_path
        if target is None:
            raise NoPathError("Tileset has no file path; a path must be given")
        save_tileset(self, target)
        self.file_path = target
        return target
