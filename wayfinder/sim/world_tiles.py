"""Tile definitions and perceptual character parsing."""

from __future__ import annotations

from dataclasses import dataclass

from wayfinder.sim.contracts import Item, Terrain
from wayfinder.sim.errors import InvalidTileKind

BLOCKING_TERRAIN: set[Terrain] = {
    Terrain.WALL,
    Terrain.DOOR,
    Terrain.EDGE,
    Terrain.TREE,
}

DESTRUCTIBLE_TERRAIN: set[Terrain] = {
    Terrain.WALL,
    Terrain.DOOR,
    Terrain.TREE,
}

_ITEM_CHARS = {item.value: item for item in Item}
_TERRAIN_CHARS = {terrain.value: terrain for terrain in Terrain}


def parse_terrain(char: str, *, x: int = -1, y: int = -1) -> Terrain:
    lowered = char.lower()
    if lowered in _ITEM_CHARS:
        return Terrain.LAND
    terrain = _TERRAIN_CHARS.get(lowered)
    if terrain is None:
        raise InvalidTileKind(char, x, y)
    return terrain


def parse_item(char: str | None, *, x: int = -1, y: int = -1) -> Item | None:
    if char is None:
        return None
    lowered = char.lower()
    if lowered in _ITEM_CHARS:
        return _ITEM_CHARS[lowered]
    if lowered in _TERRAIN_CHARS:
        return None
    raise InvalidTileKind(char, x, y)


@dataclass
class Tile:
    terrain: Terrain
    item: Item | None
    x: int
    y: int

    @classmethod
    def from_chars(
        cls, terrain_char: str, item_char: str | None, x: int, y: int
    ) -> "Tile":
        return cls(
            terrain=parse_terrain(terrain_char, x=x, y=y),
            item=parse_item(item_char, x=x, y=y),
            x=x,
            y=y,
        )

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def blocks_movement(self) -> bool:
        return self.terrain in BLOCKING_TERRAIN

    @property
    def is_water(self) -> bool:
        return self.terrain == Terrain.WATER

    def update(self, terrain_char: str, item_char: str | None) -> None:
        # Parse both before assigning so a bad char leaves the tile untouched.
        terrain = parse_terrain(terrain_char, x=self.x, y=self.y)
        item = parse_item(item_char, x=self.x, y=self.y)
        self.terrain = terrain
        self.item = item

    def copy(self) -> "Tile":
        return Tile(terrain=self.terrain, item=self.item, x=self.x, y=self.y)

    def symbol(self) -> str:
        if self.item is not None:
            return self.item.value
        return self.terrain.value
