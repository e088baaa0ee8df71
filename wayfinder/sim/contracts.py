"""Core enumerations and the perception contract."""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, field_validator

WINDOW_SIZE = 5
WINDOW_RADIUS = WINDOW_SIZE // 2


class Terrain(str, Enum):
    LAND = " "
    WATER = "~"
    TREE = "t"
    DOOR = "-"
    WALL = "*"
    EDGE = "."


class Item(str, Enum):
    AXE = "a"
    KEY = "k"
    DYNAMITE = "d"
    TREASURE = "$"


class Direction(IntEnum):
    EAST = 0
    NORTH = 1
    WEST = 2
    SOUTH = 3

    def turned_left(self) -> "Direction":
        return Direction((self + 1) % 4)

    def turned_right(self) -> "Direction":
        return Direction((self + 3) % 4)

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Direction.EAST: (1, 0),
    Direction.NORTH: (0, -1),
    Direction.WEST: (-1, 0),
    Direction.SOUTH: (0, 1),
}


class Action(str, Enum):
    FORWARD = "f"
    LEFT = "l"
    RIGHT = "r"
    CHOP = "c"
    UNLOCK = "u"
    DETONATE = "b"
    NOTHING = "0"


class SearchMode(str, Enum):
    SAFE = "safe"
    MODERATE = "moderate"
    FREE = "free"
    HYPOTHETICAL = "hypothetical"


class PerceptionWindow(BaseModel):
    """The 5x5 view around the agent, rows as seen facing forward."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rows: tuple[str, ...]

    @field_validator("rows")
    @classmethod
    def validate_shape(cls, rows: tuple[str, ...]) -> tuple[str, ...]:
        if len(rows) != WINDOW_SIZE:
            raise ValueError(f"window must have {WINDOW_SIZE} rows")
        for row in rows:
            if len(row) != WINDOW_SIZE:
                raise ValueError(f"window rows must have {WINDOW_SIZE} cells")
        return rows

    @classmethod
    def from_rows(cls, rows: list[str]) -> "PerceptionWindow":
        return cls(rows=tuple(rows))

    @classmethod
    def from_cells(cls, cells: str) -> "PerceptionWindow":
        """Build a window from the 24 streamed cells (center omitted)."""
        expected = WINDOW_SIZE * WINDOW_SIZE - 1
        if len(cells) != expected:
            raise ValueError(f"expected {expected} cells, got {len(cells)}")
        center = WINDOW_RADIUS * WINDOW_SIZE + WINDOW_RADIUS
        full = cells[:center] + "^" + cells[center:]
        return cls(
            rows=tuple(
                full[index : index + WINDOW_SIZE]
                for index in range(0, len(full), WINDOW_SIZE)
            )
        )

    def cell(self, row: int, col: int) -> str:
        return self.rows[row][col]
