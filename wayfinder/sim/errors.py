"""Planner error kinds."""

from __future__ import annotations


class PlannerError(Exception):
    """Base class for every error raised by the planning core."""


class InvalidTileKind(PlannerError, ValueError):
    def __init__(self, char: str, x: int, y: int) -> None:
        super().__init__(
            f"Character {char!r} at x={x} y={y} is not a valid tile kind."
        )
        self.char = char
        self.x = x
        self.y = y


class NoTargets(PlannerError):
    """Targeted search was asked to run without any target."""


class NoPathFound(PlannerError):
    """The frontier was exhausted without reaching a goal."""


class DiscoveryLedgerMismatch(PlannerError):
    """A tile was removed from a discovery list that never registered it."""
