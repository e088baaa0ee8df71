"""Search nodes: hypothetical world states with cost bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from wayfinder.sim.contracts import Action, SearchMode, Terrain
from wayfinder.sim.search_policy import legal_actions
from wayfinder.sim.world_state import Position, StateSignature, WorldState

TURN_COST = 1
FORWARD_COST = 1
WATER_TO_LAND_COST = 5
LAND_TO_WATER_COST = 12
CHOP_COST = 1
CHOP_WITH_RAFT_COST = 10
UNLOCK_COST = 1
DETONATE_WALL_COST = 20
DETONATE_TREE_COST = 30
DETONATE_DOOR_COST = 30


@dataclass(eq=False)
class SearchNode:
    state: WorldState
    mode: SearchMode
    targets: tuple[Position, ...] = ()
    cost: int = 0
    heuristic: int = 0
    action: Action | None = None
    parent: int | None = None
    depth: int = 0

    @classmethod
    def root(
        cls,
        state: WorldState,
        targets: Iterable[Position],
        mode: SearchMode,
    ) -> "SearchNode":
        node = cls(state=state.branch(), mode=mode, targets=tuple(targets))
        node.heuristic = node.estimate()
        return node

    @property
    def total_cost(self) -> int:
        return self.cost + self.heuristic

    def signature(self) -> StateSignature:
        return self.state.signature()

    def same_state(self, other: "SearchNode") -> bool:
        return self.state.same_state(other.state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchNode):
            return NotImplemented
        return self.same_state(other)

    def __hash__(self) -> int:
        return hash(self.signature())

    def estimate(self) -> int:
        if not self.targets:
            return 0
        x, y = self.state.position
        return min(abs(tx - x) + abs(ty - y) for tx, ty in self.targets)

    def reached_target(self) -> bool:
        return self.state.position in self.targets

    def reveals_unseen(self) -> bool:
        return self.state.world_map.unseen_in_window(*self.state.position) > 0

    def increase_cost(self, action: Action, before: WorldState) -> None:
        self.cost += step_cost(action, before)

    def child(self, action: Action, parent_index: int | None) -> "SearchNode":
        state = self.state.branch()
        state.apply_action(action, unrestricted=self.mode == SearchMode.HYPOTHETICAL)
        node = SearchNode(
            state=state,
            mode=self.mode,
            targets=self.targets,
            cost=self.cost,
            action=action,
            parent=parent_index,
            depth=self.depth + 1,
        )
        node.increase_cost(action, self.state)
        node.heuristic = node.estimate()
        return node

    def expand(
        self,
        index: int | None = None,
        ancestors: Iterable[StateSignature] = (),
    ) -> list["SearchNode"]:
        """Generate legal children, dropping any that repeat a state on this branch."""
        seen = set(ancestors)
        seen.add(self.signature())
        children = []
        for action in legal_actions(self.state, self.mode):
            node = self.child(action, index)
            if node.signature() in seen:
                continue
            children.append(node)
        return children


def step_cost(action: Action, before: WorldState) -> int:
    """Cost of taking ``action`` from ``before``."""
    trees = max(1, before.known_tree_count)
    if action in (Action.LEFT, Action.RIGHT):
        return TURN_COST
    if action == Action.FORWARD:
        current = before.current_tile()
        ahead = before.forward_tile()
        on_water = current is not None and current.is_water
        into_water = ahead is not None and ahead.is_water
        if on_water and not into_water:
            return WATER_TO_LAND_COST
        if into_water and not on_water:
            return _ceil_div(LAND_TO_WATER_COST, trees)
        return FORWARD_COST
    if action == Action.CHOP:
        if not before.has_raft:
            return CHOP_COST
        return _ceil_div(CHOP_WITH_RAFT_COST, trees)
    if action == Action.UNLOCK:
        return UNLOCK_COST
    if action == Action.DETONATE:
        ahead = before.forward_tile()
        if ahead is not None and ahead.terrain == Terrain.TREE:
            return DETONATE_TREE_COST
        if ahead is not None and ahead.terrain == Terrain.DOOR:
            return DETONATE_DOOR_COST
        return DETONATE_WALL_COST
    return 0


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)
