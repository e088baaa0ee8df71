"""Planning core: world model, search modes and state-space search."""

from wayfinder.sim.contracts import (
    Action,
    Direction,
    Item,
    PerceptionWindow,
    SearchMode,
    Terrain,
)
from wayfinder.sim.errors import (
    DiscoveryLedgerMismatch,
    InvalidTileKind,
    NoPathFound,
    NoTargets,
    PlannerError,
)
from wayfinder.sim.pathfinding import SearchEngine, SearchResult, astar, explore_ucs
from wayfinder.sim.search_node import SearchNode
from wayfinder.sim.search_policy import legal_actions, plan_is_executable
from wayfinder.sim.world_state import MAP_SIZE, START, Sighting, WorldMap, WorldState
from wayfinder.sim.world_tiles import Tile

__all__ = [
    "Action",
    "Direction",
    "DiscoveryLedgerMismatch",
    "InvalidTileKind",
    "Item",
    "MAP_SIZE",
    "NoPathFound",
    "NoTargets",
    "PerceptionWindow",
    "PlannerError",
    "START",
    "SearchEngine",
    "SearchMode",
    "SearchNode",
    "SearchResult",
    "Sighting",
    "Terrain",
    "Tile",
    "WorldMap",
    "WorldState",
    "astar",
    "explore_ucs",
    "legal_actions",
    "plan_is_executable",
]
