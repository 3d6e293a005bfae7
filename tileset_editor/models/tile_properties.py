"""
Tile property sets and the per-tileset registry that owns them.

A property set is a named bundle of gameplay attributes. The tileset core
never interprets the attributes; they are carried through load and save
verbatim. Tiles refer to a property set by name only.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from ..errors import DuplicateNameError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TileProperties:
    """
    A named, immutable bundle of opaque tile attributes.

    Attribute order is preserved so that a saved document matches the one
    it was loaded from.
    """
    name: str
    # Hashed by name only
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Tile properties need a non-empty name")
        if "name" in self.attributes:
            raise ValueError("'name' is reserved and cannot be an attribute")
        # Freeze a private copy so callers cannot mutate it behind our back
        frozen = MappingProxyType({str(k): str(v) for k, v in self.attributes.items()})
        object.__setattr__(self, "attributes", frozen)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(key, default)

    def to_dict(self) -> Dict[str, str]:
        """Name first, then the attributes in their original order."""
        return {"name": self.name, **self.attributes}


class PropertiesRegistry:
    """
    Append-only mapping of property-set name to TileProperties.

    Names are case-sensitive and unique. There is no removal, so a name
    held by a tile always resolves.
    """

    def __init__(self):
        self._entries: Dict[str, TileProperties] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TileProperties]:
        return iter(list(self._entries.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def names(self) -> List[str]:
        """Registered names in insertion order."""
        return list(self._entries)

    def add(self, properties: TileProperties) -> None:
        """
        Register a property set under its name.

        Raises:
            DuplicateNameError: If the name is already registered. The
                registry is left unchanged.
        """
        if properties.name in self._entries:
            raise DuplicateNameError(
                f"Tile properties '{properties.name}' already exist"
            )
        self._entries[properties.name] = properties
        logger.debug("Registered tile properties '%s'", properties.name)

    def find(self, name: str) -> Optional[TileProperties]:
        return self._entries.get(name)

    def get(self, name: str) -> TileProperties:
        """
        Look up a property set by exact name.

        Raises:
            NotFoundError: If no set with that name is registered.
        """
        try:
            return self._entries[name]
        except KeyError:
            raise NotFoundError(f"No tile properties named '{name}'") from None
