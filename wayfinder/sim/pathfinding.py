"""Best-first state-space search (A* and uniform-cost exploration)."""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from wayfinder.sim.contracts import Action, SearchMode
from wayfinder.sim.errors import NoPathFound, NoTargets
from wayfinder.sim.search_node import SearchNode
from wayfinder.sim.world_state import Position, StateSignature, WorldState
from wayfinder.sim.world_tiles import Tile

logger = logging.getLogger(__name__)

Target = Tile | Position


@dataclass(frozen=True)
class SearchResult:
    actions: list[Action]
    cost: int
    expanded: int
    goal: Position


class Frontier:
    """Open set of a search: a heap plus the best open node per state.

    Heap entries are ``(f, h, serial, index)`` into the shared node arena, so
    ties on ``f`` go to the lower heuristic and then to the earlier push. A
    cheaper duplicate replaces the open node by repointing the index; the old
    heap entry stays behind and is skipped when popped.
    """

    def __init__(self, arena: list[SearchNode]) -> None:
        self._arena = arena
        self._heap: list[tuple[int, int, int, int]] = []
        self._best: dict[StateSignature, int] = {}
        self._serial = itertools.count()

    def __len__(self) -> int:
        return len(self._best)

    def push(self, node: SearchNode) -> int | None:
        """Add ``node`` unless an open duplicate is at least as cheap."""
        signature = node.signature()
        existing = self._best.get(signature)
        if existing is not None and self._arena[existing].total_cost <= node.total_cost:
            return None
        self._arena.append(node)
        index = len(self._arena) - 1
        self._best[signature] = index
        heapq.heappush(
            self._heap, (node.total_cost, node.heuristic, next(self._serial), index)
        )
        return index

    def pop(self) -> int:
        while self._heap:
            _, _, _, index = heapq.heappop(self._heap)
            signature = self._arena[index].signature()
            if self._best.get(signature) != index:
                continue
            del self._best[signature]
            return index
        raise IndexError("pop from an empty frontier")


class SearchEngine:
    """Plans action sequences from a world state without mutating it.

    Nodes live in an arena list and refer to their parent by index; the
    frontier holds arena indices and the closed set holds state signatures.
    """

    def astar(
        self,
        state: WorldState,
        targets: Sequence[Target],
        mode: SearchMode = SearchMode.FREE,
    ) -> SearchResult:
        if not targets:
            raise NoTargets("No targets provided")
        positions = [_target_position(target) for target in targets]
        return self._find_path(state, positions, mode)

    def explore_ucs(
        self, state: WorldState, mode: SearchMode = SearchMode.SAFE
    ) -> SearchResult:
        return self._find_path(state, [], mode)

    def _find_path(
        self,
        state: WorldState,
        targets: list[Position],
        mode: SearchMode,
    ) -> SearchResult:
        explore = not targets
        arena: list[SearchNode] = []
        frontier = Frontier(arena)
        frontier.push(SearchNode.root(state, targets, mode))
        closed: set[StateSignature] = set()
        expanded = 0
        logger.debug(
            "Searching from %s mode=%s targets=%d",
            state.position,
            mode.value,
            len(targets),
        )

        while frontier:
            index = frontier.pop()
            current = arena[index]
            closed.add(current.signature())

            if self._is_goal(current, explore=explore):
                actions = _reconstruct_actions(arena, index)
                logger.debug(
                    "Found plan of %d actions (cost %d) after %d expansions",
                    len(actions),
                    current.cost,
                    expanded,
                )
                return SearchResult(
                    actions=actions,
                    cost=current.cost,
                    expanded=expanded,
                    goal=current.state.position,
                )

            expanded += 1
            for child in current.expand(index, _ancestor_signatures(arena, index)):
                if child.signature() in closed:
                    continue
                frontier.push(child)

        logger.debug("Frontier exhausted after %d expansions", expanded)
        raise NoPathFound("Exhausted all possibilities")

    @staticmethod
    def _is_goal(node: SearchNode, *, explore: bool) -> bool:
        if explore:
            return node.reveals_unseen()
        return node.reached_target()


def astar(
    state: WorldState,
    targets: Sequence[Target],
    mode: SearchMode = SearchMode.FREE,
) -> list[Action]:
    return SearchEngine().astar(state, targets, mode).actions


def explore_ucs(state: WorldState, mode: SearchMode = SearchMode.SAFE) -> list[Action]:
    return SearchEngine().explore_ucs(state, mode).actions


def _target_position(target: Target) -> Position:
    if isinstance(target, Tile):
        return target.position
    x, y = target
    return (x, y)


def _ancestor_signatures(
    arena: list[SearchNode], index: int
) -> Iterable[StateSignature]:
    parent = arena[index].parent
    while parent is not None:
        node = arena[parent]
        yield node.signature()
        parent = node.parent


def _reconstruct_actions(arena: list[SearchNode], index: int) -> list[Action]:
    actions: list[Action] = []
    current: int | None = index
    while current is not None:
        node = arena[current]
        if node.action is not None:
            actions.append(node.action)
        current = node.parent
    actions.reverse()
    return actions
