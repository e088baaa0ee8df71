from wayfinder.sim.contracts import Action, Direction, SearchMode
from wayfinder.sim.search_policy import (
    can_chop,
    can_detonate,
    can_move_forward,
    can_unlock,
    legal_actions,
    plan_is_executable,
)
from wayfinder.sim.world_state import WorldState


def test_safe_mode_stays_on_current_terrain() -> None:
    onto_water = _build_state(["~", " "])
    onto_water.has_raft = True
    assert not can_move_forward(onto_water, SearchMode.SAFE)

    on_water = _build_state(["~", "~"])
    assert can_move_forward(on_water, SearchMode.SAFE)

    to_shore = _build_state([" ", "~"])
    assert not can_move_forward(to_shore, SearchMode.SAFE)
    assert can_move_forward(to_shore, SearchMode.MODERATE)


def test_entering_water_needs_raft_outside_hypothetical() -> None:
    state = _build_state(["~", " "])
    assert not can_move_forward(state, SearchMode.MODERATE)
    assert not can_move_forward(state, SearchMode.FREE)
    assert can_move_forward(state, SearchMode.HYPOTHETICAL)

    state.has_raft = True
    assert can_move_forward(state, SearchMode.MODERATE)


def test_tool_actions_per_mode() -> None:
    tree = _build_state(["t", " "])
    door = _build_state(["-", " "])
    wall = _build_state(["*", " "])
    for state in (tree, door, wall):
        state.has_axe = True
        state.has_key = True
        state.dynamite = 1

    assert not can_chop(tree, SearchMode.SAFE)
    assert can_chop(tree, SearchMode.MODERATE)
    assert not can_unlock(door, SearchMode.SAFE)
    assert can_unlock(door, SearchMode.MODERATE)
    assert not can_detonate(wall, SearchMode.MODERATE)
    assert can_detonate(wall, SearchMode.FREE)
    assert can_detonate(tree, SearchMode.FREE)
    assert not can_chop(door, SearchMode.FREE)


def test_hypothetical_ignores_inventory() -> None:
    tree = _build_state(["t", " "])
    door = _build_state(["-", " "])

    assert not can_chop(tree, SearchMode.FREE)
    assert can_chop(tree, SearchMode.HYPOTHETICAL)
    assert not can_unlock(door, SearchMode.FREE)
    assert can_unlock(door, SearchMode.HYPOTHETICAL)
    assert can_detonate(door, SearchMode.HYPOTHETICAL)


def test_unseen_forward_tile_only_allows_turns() -> None:
    state = _build_state([" "], at=(0, 0))
    assert legal_actions(state, SearchMode.HYPOTHETICAL) == [Action.LEFT, Action.RIGHT]


def test_legal_actions_order() -> None:
    state = _build_state(["t", " "])
    state.has_axe = True
    state.dynamite = 1

    assert legal_actions(state, SearchMode.FREE) == [
        Action.LEFT,
        Action.RIGHT,
        Action.CHOP,
        Action.DETONATE,
    ]


def test_plan_validation_checks_inventory() -> None:
    state = _build_state(["$", "-", " "], at=(0, 2))
    plan = [Action.UNLOCK, Action.FORWARD, Action.FORWARD]

    assert not plan_is_executable(state, plan)

    state.has_key = True
    assert plan_is_executable(state, plan)
    assert not state.has_treasure


def test_plan_validation_rejects_moves_without_tools() -> None:
    into_water = _build_state(["$", "~", " "], at=(0, 2))
    assert not plan_is_executable(into_water, [Action.FORWARD, Action.FORWARD])
    into_water.has_raft = True
    assert plan_is_executable(into_water, [Action.FORWARD, Action.FORWARD])

    tree = _build_state(["t", " "])
    assert not plan_is_executable(tree, [Action.CHOP])
    tree.has_axe = True
    assert plan_is_executable(tree, [Action.CHOP, Action.FORWARD])

    wall = _build_state(["*", " "])
    assert not plan_is_executable(wall, [Action.DETONATE])
    wall.dynamite = 1
    assert plan_is_executable(wall, [Action.DETONATE, Action.FORWARD])
    assert wall.dynamite == 1


def test_plan_validation_counts_tools_picked_up_on_the_way() -> None:
    state = _build_state(["-", "k", " "], at=(0, 2))

    assert plan_is_executable(state, [Action.FORWARD, Action.UNLOCK, Action.FORWARD])
    assert not state.has_key


def _build_state(
    rows: list[str],
    *,
    at: tuple[int, int] = (0, 1),
    facing: Direction = Direction.NORTH,
) -> WorldState:
    state = WorldState(x=10 + at[0], y=10 + at[1], facing=facing)
    for dy, row in enumerate(rows):
        for dx, char in enumerate(row):
            state.observe_cell(10 + dx, 10 + dy, char)
    return state
