"""
Tileset persistence: reading and writing the XML tileset document.

Document layout::

    <Tileset tilesheet="tiles.png" tilesize="16">
      <TileProperties>
        <Properties name="Solid" blocking="True" />
      </TileProperties>
      <Tile id="0" name="Ground" properties="Solid">
        <Sprite width="16" height="16">
          <Frame x="0" y="0" duration="0" />
        </Sprite>
      </Tile>
    </Tileset>

The sheet path is stored relative to the document's directory. Tiles are
written in index order and property attributes in their original order,
so saving an unmodified tileset reproduces the document it came from.
"""

import logging
import os
import shutil
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Optional, Union

from ..errors import DuplicateNameError, FormatError, NotFoundError, NotWritableError
from ..models.frame import Frame
from ..models.sprite import Sprite
from ..models.tile import Tile
from ..models.tile_properties import TileProperties
from ..models.tileset import Tileset
from .sheet_image import load_image

logger = logging.getLogger(__name__)

ROOT_TAG = "Tileset"
PROPERTIES_SECTION_TAG = "TileProperties"
PROPERTIES_TAG = "Properties"
TILE_TAG = "Tile"
SPRITE_TAG = "Sprite"
FRAME_TAG = "Frame"


def _int_attr(elem: ET.Element, name: str, minimum: Optional[int] = None) -> int:
    """Read a required integer attribute, raising FormatError if it is bad."""
    raw = elem.get(name)
    if raw is None:
        raise FormatError(f"<{elem.tag}> is missing the '{name}' attribute")
    try:
        value = int(raw)
    except ValueError:
        raise FormatError(
            f"<{elem.tag}> attribute '{name}' is not an integer: {raw!r}"
        ) from None
    if minimum is not None and value < minimum:
        raise FormatError(
            f"<{elem.tag}> attribute '{name}' must be at least {minimum}, got {value}"
        )
    return value


def _resolve_sheet_path(raw: str, base_dir: Path) -> Path:
    # Older documents were written on Windows with backslash separators
    relative = Path(raw.replace("\\", "/"))
    return relative if relative.is_absolute() else base_dir / relative


def _relative_sheet_path(sheet_path: Path, base_dir: Path) -> str:
    try:
        return Path(os.path.relpath(sheet_path, base_dir)).as_posix()
    except ValueError:
        # Different drives on Windows: no relative form exists
        return sheet_path.as_posix()


# -- reading ------------------------------------------------------------


def _properties_from_xml(elem: ET.Element) -> TileProperties:
    attributes: Dict[str, str] = dict(elem.attrib)
    name = attributes.pop("name", None)
    if not name:
        raise FormatError(f"<{PROPERTIES_TAG}> is missing the 'name' attribute")
    return TileProperties(name=name, attributes=attributes)


def _sprite_from_xml(elem: ET.Element, tile_size: int) -> Sprite:
    width = _int_attr(elem, "width", minimum=1)
    height = _int_attr(elem, "height", minimum=1)
    if width != tile_size or height != tile_size:
        raise FormatError(
            f"Sprite size {width}x{height} does not match tile size {tile_size}"
        )

    frames = [
        Frame(
            x=_int_attr(frame_elem, "x"),
            y=_int_attr(frame_elem, "y"),
            size=tile_size,
            duration=_int_attr(frame_elem, "duration", minimum=0),
        )
        for frame_elem in elem.findall(FRAME_TAG)
    ]
    if not frames:
        raise FormatError("Sprite has no frames")
    return Sprite(frames)


def tileset_from_xml(root: ET.Element, base_dir: Union[str, Path]) -> Tileset:
    """
    Build a Tileset from a parsed document.

    Args:
        root: The <Tileset> element.
        base_dir: Directory the sheet path is relative to.

    Raises:
        FormatError: If the document is malformed.
        NotFoundError: If the sheet image is missing.
        ImageLoadError: If the sheet image cannot be decoded.
    """
    if root.tag != ROOT_TAG:
        raise FormatError(f"Expected <{ROOT_TAG}> root element, got <{root.tag}>")

    tile_size = _int_attr(root, "tilesize", minimum=1)
    sheet_ref = root.get("tilesheet")
    if not sheet_ref:
        raise FormatError(f"<{ROOT_TAG}> is missing the 'tilesheet' attribute")

    sheet_path = _resolve_sheet_path(sheet_ref, Path(base_dir))
    tileset = Tileset(load_image(sheet_path), tile_size, sheet_path=sheet_path)

    sections = root.findall(PROPERTIES_SECTION_TAG)
    if len(sections) != 1:
        raise FormatError(
            f"Expected one <{PROPERTIES_SECTION_TAG}> section, found {len(sections)}"
        )
    for props_elem in sections[0].findall(PROPERTIES_TAG):
        try:
            tileset.add_properties(_properties_from_xml(props_elem))
        except DuplicateNameError as e:
            raise FormatError(str(e)) from e

    for position, tile_elem in enumerate(root.findall(TILE_TAG)):
        tile_id = _int_attr(tile_elem, "id", minimum=0)
        if tile_id != position:
            raise FormatError(f"Tile id {tile_id} found at position {position}")
        name = tile_elem.get("name")
        if name is None:
            raise FormatError(f"Tile {position} is missing the 'name' attribute")

        properties_name = tile_elem.get("properties")
        if properties_name is not None and properties_name not in tileset.properties:
            raise FormatError(
                f"Tile {position} refers to unknown properties '{properties_name}'"
            )

        sprite_elem = tile_elem.find(SPRITE_TAG)
        if sprite_elem is None:
            raise FormatError(f"Tile {position} has no <{SPRITE_TAG}>")

        tileset.tiles.append(Tile(
            name=name,
            sprite=_sprite_from_xml(sprite_elem, tile_size),
            properties_name=properties_name,
        ))

    return tileset


def load_tileset(path: Union[str, Path]) -> Tileset:
    """
    Load a tileset document from disk.

    Raises:
        NotFoundError: If the document or its sheet image is missing.
        FormatError: If the document is malformed.
        ImageLoadError: If the sheet image cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"Tileset file not found: {path}")

    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise FormatError(f"Malformed tileset document {path}: {e}") from e
    except OSError as e:
        raise NotFoundError(f"Cannot read tileset file {path}: {e}") from e

    tileset = tileset_from_xml(tree.getroot(), path.absolute().parent)
    tileset.file_path = path
    logger.info(
        "Loaded tileset %s: %d tiles, %d property sets",
        path, len(tileset), len(tileset.properties),
    )
    return tileset


# -- writing ------------------------------------------------------------


def tileset_to_xml(tileset: Tileset, base_dir: Union[str, Path]) -> ET.Element:
    """
    Build the document for a tileset.

    Args:
        tileset: The tileset to serialize.
        base_dir: Directory the sheet path is written relative to.

    Raises:
        NotWritableError: If the tileset has no sheet path to refer to.
    """
    if tileset.sheet_path is None:
        raise NotWritableError("Tileset sheet has no file path to store")

    root = ET.Element(ROOT_TAG)
    root.set("tilesheet", _relative_sheet_path(tileset.sheet_path, Path(base_dir)))
    root.set("tilesize", str(tileset.tile_size))

    section = ET.SubElement(root, PROPERTIES_SECTION_TAG)
    for properties in tileset.properties:
        props_elem = ET.SubElement(section, PROPERTIES_TAG)
        for key, value in properties.to_dict().items():
            props_elem.set(key, value)

    size = str(tileset.tile_size)
    for index, tile in enumerate(tileset.tiles):
        tile_elem = ET.SubElement(root, TILE_TAG)
        tile_elem.set("id", str(index))
        tile_elem.set("name", tile.name)
        if tile.properties_name is not None:
            tile_elem.set("properties", tile.properties_name)

        sprite_elem = ET.SubElement(tile_elem, SPRITE_TAG)
        sprite_elem.set("width", size)
        sprite_elem.set("height", size)
        for frame in tile.sprite:
            frame_elem = ET.SubElement(sprite_elem, FRAME_TAG)
            frame_elem.set("x", str(frame.x))
            frame_elem.set("y", str(frame.y))
            frame_elem.set("duration", str(frame.duration))

    return root


def _default_file_mode() -> int:
    # Temporary files are created 0600; new documents get the usual umask mode
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_tileset(tileset: Tileset, path: Union[str, Path]) -> None:
    """
    Write a tileset document to path.

    The document is written to a temporary file next to the target and
    moved into place, so a failed save leaves any existing file intact.
    An existing file keeps its permission bits.

    Raises:
        NotWritableError: If the file cannot be written.
    """
    path = Path(path)
    directory = path.absolute().parent

    root = tileset_to_xml(tileset, directory)
    ET.indent(root, space="  ")
    tree = ET.ElementTree(root)

    temp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=directory, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as handle:
            temp_name = handle.name
            tree.write(handle, encoding="utf-8", xml_declaration=True)
        if path.exists():
            shutil.copymode(path, temp_name)
        else:
            os.chmod(temp_name, _default_file_mode())
        os.replace(temp_name, path)
    except OSError as e:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise NotWritableError(f"Cannot write tileset to {path}: {e}") from e

    logger.info("Saved tileset to %s (%d tiles)", path, len(tileset))
