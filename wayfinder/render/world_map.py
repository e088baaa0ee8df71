"""Rich rendering of the explored map and the agent's inventory."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from wayfinder.sim.contracts import Direction, Item, Terrain
from wayfinder.sim.world_state import START, WorldState

TILE_STYLES = {
    Terrain.LAND: "grey70",
    Terrain.WATER: "blue",
    Terrain.TREE: "green3",
    Terrain.DOOR: "yellow",
    Terrain.WALL: "bright_magenta",
    Terrain.EDGE: "grey50",
}

ITEM_STYLE = "bright_yellow"
TREASURE_STYLE = "bold bright_yellow"
START_STYLE = "bold bright_green"
AGENT_STYLE = "bold bright_cyan"
UNSEEN_STYLE = "grey23"

UNSEEN_SYMBOL = "?"
START_SYMBOL = "S"
AGENT_SYMBOLS = {
    Direction.NORTH: "^",
    Direction.EAST: ">",
    Direction.WEST: "<",
    Direction.SOUTH: "v",
}


def render_map(state: WorldState, *, margin: int = 0) -> Text:
    """Draw the bounding box of every seen tile, one line per row."""
    bounds = state.world_map.explored_bounds()
    if bounds is None:
        return Text("Nothing explored yet.")
    min_x, min_y, max_x, max_y = bounds
    min_x = min(min_x, state.x) - margin
    min_y = min(min_y, state.y) - margin
    max_x = max(max_x, state.x) + margin
    max_y = max(max_y, state.y) + margin

    text = Text()
    for y in range(min_y, max_y + 1):
        for x in range(min_x, max_x + 1):
            symbol, style = _cell(state, x, y)
            text.append(symbol, style=style)
        if y != max_y:
            text.append("\n")
    return text


def render_state(state: WorldState) -> Table:
    table = Table(title="Inventory", show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Position", f"{state.x}, {state.y}")
    table.add_row("Facing", state.facing.name.title())
    table.add_row("Axe", _yes_no(state.has_axe))
    table.add_row("Key", _yes_no(state.has_key))
    table.add_row("Raft", _yes_no(state.has_raft))
    table.add_row("Dynamite", str(state.dynamite))
    table.add_row("Treasure", _yes_no(state.has_treasure))
    table.add_row("Known trees", str(len(state.known_trees)))
    table.add_row("Known items", str(len(state.known_items)))
    table.add_row("Known treasures", str(len(state.known_treasures)))
    return table


def _cell(state: WorldState, x: int, y: int) -> tuple[str, str]:
    if (x, y) == state.position:
        return AGENT_SYMBOLS[state.facing], AGENT_STYLE
    tile = state.world_map.get(x, y)
    if tile is None:
        return UNSEEN_SYMBOL, UNSEEN_STYLE
    if (x, y) == (START, START):
        return START_SYMBOL, START_STYLE
    if tile.item == Item.TREASURE:
        return tile.symbol(), TREASURE_STYLE
    if tile.item is not None:
        return tile.symbol(), ITEM_STYLE
    return tile.symbol(), TILE_STYLES[tile.terrain]


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"
