"""Exceptions raised by the tileset core and its persistence layer."""


class TilesetError(Exception):
    """Base class for all tileset errors."""


class NotFoundError(TilesetError, LookupError):
    """A tileset file, sheet image or property name does not exist."""


class FormatError(TilesetError):
    """A persisted tileset document is malformed."""


class ImageLoadError(TilesetError):
    """A sheet image exists but cannot be decoded."""


class DuplicateNameError(TilesetError):
    """A property set with the same name is already registered."""


class NotWritableError(TilesetError):
    """A tileset could not be written to disk."""


class NoPathError(TilesetError):
    """Save was requested but the tileset has never been given a path."""


class TileIndexError(TilesetError, IndexError):
    """A tile or frame index is outside the valid range."""
