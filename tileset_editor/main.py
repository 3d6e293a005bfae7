"""
Tileset Editor - command line entry point.

    tileset-editor new SHEET.png 16 tiles.xml --tiles 4
    tileset-editor info tiles.xml
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .errors import TilesetError
from .models.tileset import Tileset
from .utils.constants import LOG_LEVEL_ENV_VAR, TILESET_FILE_EXTENSION
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tileset-editor",
        description="Create and inspect animated tilesets.",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV_VAR, "warning"),
        help=f"Console log level (default from ${LOG_LEVEL_ENV_VAR}, else warning)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    new = commands.add_parser("new", help="Create a tileset on a sheet image")
    new.add_argument("image", help="Sheet image path")
    new.add_argument("tile_size", type=int, help="Tile edge length in pixels")
    new.add_argument(
        "output",
        help=f"Tileset document to write ({TILESET_FILE_EXTENSION} added if no suffix)",
    )
    new.add_argument("--tiles", type=int, default=0, help="Number of empty tiles to add")

    info = commands.add_parser("info", help="Summarize a tileset document")
    info.add_argument("path", help="Tileset document to read")

    return parser


def _cmd_new(args: argparse.Namespace) -> None:
    tileset = Tileset.create_new(args.image, args.tile_size)
    for _ in range(max(args.tiles, 0)):
        tileset.add_tile()
    output = Path(args.output)
    if not output.suffix:
        output = output.with_suffix(TILESET_FILE_EXTENSION)
    path = tileset.save(output)
    print(f"Wrote {path} ({len(tileset)} tiles)")


def _cmd_info(args: argparse.Namespace) -> None:
    tileset = Tileset.load(args.path)
    print(f"Sheet: {tileset.sheet_path} ({tileset.sheet_width}x{tileset.sheet_height})")
    print(f"Tile size: {tileset.tile_size}")
    print(f"Property sets: {', '.join(tileset.property_names()) or '(none)'}")
    print(f"Tiles: {len(tileset)}")
    for index, tile in enumerate(tileset.tiles):
        props = tile.properties_name or "-"
        print(f"  {index:4d}  {tile.name or '(unnamed)'}  frames={tile.frame_count}  properties={props}")


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point."""
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    handlers = {"new": _cmd_new, "info": _cmd_info}
    try:
        handlers[args.command](args)
    except (TilesetError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
