"""World map and agent state shared by the live agent and search nodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterator

from wayfinder.sim.contracts import (
    WINDOW_RADIUS,
    WINDOW_SIZE,
    Action,
    Direction,
    Item,
    PerceptionWindow,
    Terrain,
)
from wayfinder.sim.errors import DiscoveryLedgerMismatch
from wayfinder.sim.world_tiles import DESTRUCTIBLE_TERRAIN, Tile

logger = logging.getLogger(__name__)

MAP_SIZE = 164
START = MAP_SIZE // 2

Position = tuple[int, int]
StateSignature = tuple


class WorldMap:
    """Sparse fixed-size grid of perceived tiles; missing cells are unseen."""

    def __init__(self, size: int = MAP_SIZE) -> None:
        self.size = size
        self._tiles: dict[Position, Tile] = {}

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> Tile | None:
        return self._tiles.get((x, y))

    def set(self, x: int, y: int, terrain_char: str, item_char: str | None) -> Tile:
        if not self.in_bounds(x, y):
            raise ValueError(f"Tile x={x} y={y} is outside the {self.size} map.")
        tile = self._tiles.get((x, y))
        if tile is None:
            tile = Tile.from_chars(terrain_char, item_char, x, y)
            self._tiles[(x, y)] = tile
        else:
            tile.update(terrain_char, item_char)
        return tile

    def deep_copy(self) -> "WorldMap":
        copied = WorldMap(self.size)
        copied._tiles = {
            position: tile.copy() for position, tile in self._tiles.items()
        }
        return copied

    def unseen_in_window(self, x: int, y: int, radius: int = WINDOW_RADIUS) -> int:
        unseen = 0
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                cx, cy = x + dx, y + dy
                if self.in_bounds(cx, cy) and (cx, cy) not in self._tiles:
                    unseen += 1
        return unseen

    def explored_bounds(self) -> tuple[int, int, int, int] | None:
        if not self._tiles:
            return None
        xs = [x for x, _ in self._tiles]
        ys = [y for _, y in self._tiles]
        return min(xs), min(ys), max(xs), max(ys)

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles.values())

    def __contains__(self, position: object) -> bool:
        return position in self._tiles


@dataclass(frozen=True)
class Sighting:
    """A known, not yet claimed tree, item or treasure."""

    x: int
    y: int
    kind: Terrain | Item

    @property
    def position(self) -> Position:
        return (self.x, self.y)


@dataclass(eq=False)
class WorldState:
    x: int = START
    y: int = START
    facing: Direction = Direction.NORTH
    has_axe: bool = False
    has_key: bool = False
    has_raft: bool = False
    has_treasure: bool = False
    dynamite: int = 0
    world_map: WorldMap = field(default_factory=WorldMap)
    doors_opened: frozenset[Position] = frozenset()
    trees_chopped: frozenset[Position] = frozenset()
    tiles_blown: frozenset[Position] = frozenset()
    known_trees: tuple[Sighting, ...] = ()
    known_items: tuple[Sighting, ...] = ()
    known_treasures: tuple[Sighting, ...] = ()
    map_shared: bool = field(default=False, repr=False)

    @property
    def position(self) -> Position:
        return (self.x, self.y)

    @property
    def has_dynamite(self) -> bool:
        return self.dynamite > 0

    @property
    def known_tree_count(self) -> int:
        return len(self.known_trees)

    def branch(self) -> "WorldState":
        """Return a copy that shares the map until either side mutates it."""
        self.map_shared = True
        return replace(self, map_shared=True)

    def tile_at(self, x: int, y: int) -> Tile | None:
        return self.world_map.get(x, y)

    def current_tile(self) -> Tile | None:
        return self.world_map.get(self.x, self.y)

    def forward_position(self) -> Position:
        dx, dy = self.facing.delta
        return (self.x + dx, self.y + dy)

    def forward_tile(self) -> Tile | None:
        return self.world_map.get(*self.forward_position())

    def signature(self) -> StateSignature:
        return (
            self.x,
            self.y,
            int(self.facing),
            self.dynamite,
            self.has_axe,
            self.has_key,
            self.has_raft,
            self.has_treasure,
            self.doors_opened,
            self.trees_chopped,
            self.tiles_blown,
        )

    def same_state(self, other: "WorldState") -> bool:
        return self.signature() == other.signature()

    # Perception

    def observe_cell(self, x: int, y: int, char: str) -> Tile:
        tile = self._writable_map().set(x, y, char, char)
        self._register_discovery(tile)
        return tile

    def apply_perceived_window(self, window: PerceptionWindow) -> None:
        for i in range(WINDOW_SIZE):
            for j in range(WINDOW_SIZE):
                row, col = _rotate_window_cell(self.facing, i, j)
                tile_x = self.x - WINDOW_RADIUS + col
                tile_y = self.y - WINDOW_RADIUS + row
                if i == WINDOW_RADIUS and j == WINDOW_RADIUS:
                    # The agent's own cell carries no information.
                    if self.world_map.get(tile_x, tile_y) is None:
                        self._writable_map().set(
                            tile_x, tile_y, Terrain.LAND.value, None
                        )
                    continue
                self.observe_cell(tile_x, tile_y, window.cell(i, j))

    # Transitions

    def apply_action(self, action: Action | str, *, unrestricted: bool = False) -> None:
        action = Action(action)
        if action == Action.LEFT:
            self.facing = self.facing.turned_left()
        elif action == Action.RIGHT:
            self.facing = self.facing.turned_right()
        elif action == Action.FORWARD:
            self._move_forward()
        elif action == Action.CHOP:
            self._chop(unrestricted=unrestricted)
        elif action == Action.UNLOCK:
            self._unlock(unrestricted=unrestricted)
        elif action == Action.DETONATE:
            self._detonate(unrestricted=unrestricted)

    def _move_forward(self) -> None:
        ahead = self.forward_tile()
        if ahead is not None and ahead.blocks_movement:
            return
        current = self.current_tile()
        if (
            ahead is not None
            and current is not None
            and current.is_water
            and not ahead.is_water
            and self.has_raft
        ):
            self.has_raft = False
        self.x, self.y = self.forward_position()
        if ahead is not None and ahead.item is not None:
            self._collect()

    def _collect(self) -> None:
        tile = self._writable_map().get(self.x, self.y)
        item = tile.item
        sighting = Sighting(tile.x, tile.y, item)
        if item == Item.TREASURE:
            self.known_treasures = _without(self.known_treasures, sighting)
        else:
            self.known_items = _without(self.known_items, sighting)
        if item == Item.AXE:
            self.has_axe = True
        elif item == Item.KEY:
            self.has_key = True
        elif item == Item.DYNAMITE:
            self.dynamite += 1
        elif item == Item.TREASURE:
            self.has_treasure = True
        tile.item = None
        logger.debug("Collected %s at (%d, %d)", item.name, tile.x, tile.y)

    def _chop(self, *, unrestricted: bool) -> None:
        ahead = self.forward_tile()
        if ahead is None or ahead.terrain != Terrain.TREE:
            return
        if not (self.has_axe or unrestricted):
            return
        self.known_trees = _without(
            self.known_trees, Sighting(ahead.x, ahead.y, Terrain.TREE)
        )
        self.has_raft = True
        self.trees_chopped = self.trees_chopped | {ahead.position}
        self._clear_forward()

    def _unlock(self, *, unrestricted: bool) -> None:
        ahead = self.forward_tile()
        if ahead is None or ahead.terrain != Terrain.DOOR:
            return
        if not (self.has_key or unrestricted):
            return
        self.doors_opened = self.doors_opened | {ahead.position}
        self._clear_forward()

    def _detonate(self, *, unrestricted: bool) -> None:
        ahead = self.forward_tile()
        if ahead is None or ahead.terrain not in DESTRUCTIBLE_TERRAIN:
            return
        if not (self.has_dynamite or unrestricted):
            return
        if ahead.terrain == Terrain.TREE:
            self.known_trees = _without(
                self.known_trees, Sighting(ahead.x, ahead.y, Terrain.TREE)
            )
        if self.dynamite > 0:
            self.dynamite -= 1
        self.tiles_blown = self.tiles_blown | {ahead.position}
        self._clear_forward()

    def _clear_forward(self) -> None:
        tile = self._writable_map().get(*self.forward_position())
        tile.terrain = Terrain.LAND

    def _writable_map(self) -> WorldMap:
        if self.map_shared:
            self.world_map = self.world_map.deep_copy()
            self.map_shared = False
        return self.world_map

    def _register_discovery(self, tile: Tile) -> None:
        if tile.terrain == Terrain.TREE:
            self.known_trees = _with(
                self.known_trees, Sighting(tile.x, tile.y, Terrain.TREE)
            )
        if tile.item == Item.TREASURE:
            self.known_treasures = _with(
                self.known_treasures, Sighting(tile.x, tile.y, tile.item)
            )
        elif tile.item is not None:
            self.known_items = _with(
                self.known_items, Sighting(tile.x, tile.y, tile.item)
            )


def _rotate_window_cell(facing: Direction, i: int, j: int) -> tuple[int, int]:
    last = WINDOW_SIZE - 1
    if facing == Direction.NORTH:
        return i, j
    if facing == Direction.WEST:
        return last - j, i
    if facing == Direction.EAST:
        return j, last - i
    return last - i, last - j


def _with(sightings: tuple[Sighting, ...], sighting: Sighting) -> tuple[Sighting, ...]:
    if sighting in sightings:
        return sightings
    return sightings + (sighting,)


def _without(
    sightings: tuple[Sighting, ...], sighting: Sighting
) -> tuple[Sighting, ...]:
    if sighting not in sightings:
        raise DiscoveryLedgerMismatch(
            f"{sighting.kind.name} at ({sighting.x}, {sighting.y}) is not registered."
        )
    return tuple(entry for entry in sightings if entry != sighting)
