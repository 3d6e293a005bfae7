"""Data models for tilesets, tiles, sprites and property sets."""

from .frame import Frame
from .sprite import Sprite
from .tile_properties import TileProperties, PropertiesRegistry
from .tile import Tile
from .tileset import Tileset
