"""Tileset editor core: tiles, animated sprites and shared tile properties."""

__version__ = "0.1.0"
