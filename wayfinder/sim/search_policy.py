"""Per-mode action legality for the planner."""

from __future__ import annotations

from typing import Iterable

from wayfinder.sim.contracts import Action, SearchMode, Terrain
from wayfinder.sim.world_state import WorldState
from wayfinder.sim.world_tiles import DESTRUCTIBLE_TERRAIN


def can_move_forward(state: WorldState, mode: SearchMode) -> bool:
    ahead = state.forward_tile()
    if ahead is None or ahead.blocks_movement:
        return False
    current = state.current_tile()
    on_water = current is not None and current.is_water
    if mode == SearchMode.SAFE:
        return ahead.is_water == on_water
    if ahead.is_water and not on_water:
        return mode == SearchMode.HYPOTHETICAL or state.has_raft
    return True


def can_chop(state: WorldState, mode: SearchMode) -> bool:
    if mode == SearchMode.SAFE:
        return False
    if not _ahead_is(state, {Terrain.TREE}):
        return False
    return mode == SearchMode.HYPOTHETICAL or state.has_axe


def can_unlock(state: WorldState, mode: SearchMode) -> bool:
    if mode == SearchMode.SAFE:
        return False
    if not _ahead_is(state, {Terrain.DOOR}):
        return False
    return mode == SearchMode.HYPOTHETICAL or state.has_key


def can_detonate(state: WorldState, mode: SearchMode) -> bool:
    if mode in (SearchMode.SAFE, SearchMode.MODERATE):
        return False
    if not _ahead_is(state, DESTRUCTIBLE_TERRAIN):
        return False
    return mode == SearchMode.HYPOTHETICAL or state.has_dynamite


def legal_actions(state: WorldState, mode: SearchMode) -> list[Action]:
    actions = [Action.LEFT, Action.RIGHT]
    if state.forward_tile() is None:
        return actions
    if can_move_forward(state, mode):
        actions.append(Action.FORWARD)
    if can_chop(state, mode):
        actions.append(Action.CHOP)
    if can_unlock(state, mode):
        actions.append(Action.UNLOCK)
    if can_detonate(state, mode):
        actions.append(Action.DETONATE)
    return actions


def plan_is_executable(state: WorldState, actions: Iterable[Action]) -> bool:
    """Replay a plan on a branch and check every step is backed by inventory.

    Plans found in HYPOTHETICAL mode may chop, unlock, blow up or cross water
    without the tools for it; this is the check that turns such a plan into
    one the agent may actually execute.
    """
    replay = state.branch()
    for action in actions:
        action = Action(action)
        if action == Action.FORWARD and not can_move_forward(replay, SearchMode.FREE):
            return False
        if action == Action.CHOP and not can_chop(replay, SearchMode.FREE):
            return False
        if action == Action.UNLOCK and not can_unlock(replay, SearchMode.FREE):
            return False
        if action == Action.DETONATE and not can_detonate(replay, SearchMode.FREE):
            return False
        replay.apply_action(action)
    return True


def _ahead_is(state: WorldState, kinds: set[Terrain]) -> bool:
    ahead = state.forward_tile()
    return ahead is not None and ahead.terrain in kinds
