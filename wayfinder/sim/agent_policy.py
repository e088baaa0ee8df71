"""Live agent: perception integration and the fallback planning cascade."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from rich.console import Console

from wayfinder.render.world_map import render_map, render_state
from wayfinder.sim.contracts import Action, PerceptionWindow, SearchMode
from wayfinder.sim.errors import NoPathFound, NoTargets
from wayfinder.sim.pathfinding import SearchEngine, SearchResult, Target
from wayfinder.sim.search_policy import plan_is_executable
from wayfinder.sim.world_state import START, Position, WorldState

logger = logging.getLogger(__name__)

Strategy = tuple[str, Callable[[], SearchResult]]


class Agent:
    def __init__(
        self,
        *,
        state: WorldState | None = None,
        engine: SearchEngine | None = None,
        console: Console | None = None,
    ) -> None:
        self.state = state or WorldState()
        self.plan: list[Action] = []
        self._engine = engine or SearchEngine()
        self._console = console

    @property
    def home(self) -> Position:
        return (START, START)

    def get_action(self, window: PerceptionWindow) -> Action:
        """Integrate a perception window and return the next action to send."""
        self.state.apply_perceived_window(window)
        if not self.plan:
            if self._console is not None and logger.isEnabledFor(logging.DEBUG):
                self._console.print(render_map(self.state))
                self._console.print(render_state(self.state))
            self.plan = self._make_plan()
        if not self.plan:
            logger.warning("No strategy produced a plan; doing nothing.")
            return Action.NOTHING
        action = self.plan.pop(0)
        self.state.apply_action(action)
        return action

    def reachable(self, targets: Sequence[Target]) -> bool:
        """Whether any target can be reached with the tools held right now."""
        try:
            result = self._engine.astar(self.state, targets, SearchMode.HYPOTHETICAL)
        except (NoPathFound, NoTargets):
            return False
        return plan_is_executable(self.state, result.actions)

    def _make_plan(self) -> list[Action]:
        for label, search in self._strategies():
            try:
                result = search()
            except (NoPathFound, NoTargets) as exc:
                logger.info("Could not find %s: %s", label, exc)
                continue
            if not result.actions:
                continue
            logger.info(
                "Planned %s: %d actions, cost %d, %d expansions",
                label,
                len(result.actions),
                result.cost,
                result.expanded,
            )
            return list(result.actions)
        return []

    def _strategies(self) -> list[Strategy]:
        state = self.state
        engine = self._engine
        strategies: list[Strategy] = []
        if state.has_treasure:
            strategies.append(
                ("path home", lambda: engine.astar(state, [self.home], SearchMode.FREE))
            )
        strategies.extend(
            [
                (
                    "safe exploration",
                    lambda: engine.explore_ucs(state, SearchMode.SAFE),
                ),
                (
                    "path to treasure",
                    lambda: engine.astar(
                        state,
                        [sighting.position for sighting in state.known_treasures],
                        SearchMode.FREE,
                    ),
                ),
                (
                    "path to item",
                    lambda: engine.astar(
                        state,
                        [sighting.position for sighting in state.known_items],
                        SearchMode.FREE,
                    ),
                ),
                (
                    "moderate exploration",
                    lambda: engine.explore_ucs(state, SearchMode.MODERATE),
                ),
                (
                    "free exploration",
                    lambda: engine.explore_ucs(state, SearchMode.FREE),
                ),
            ]
        )
        return strategies
