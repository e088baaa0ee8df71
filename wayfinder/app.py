"""Game session loop: read perception windows, write actions."""

from __future__ import annotations

import logging
import socket
from typing import BinaryIO

from rich.console import Console

from wayfinder.config import Settings
from wayfinder.sim.agent_policy import Agent
from wayfinder.sim.contracts import WINDOW_SIZE, PerceptionWindow

logger = logging.getLogger(__name__)

CELLS_PER_WINDOW = WINDOW_SIZE * WINDOW_SIZE - 1


def run_session(
    reader: BinaryIO,
    writer: BinaryIO,
    agent: Agent | None = None,
    *,
    max_steps: int | None = None,
) -> int:
    """Play until the stream ends; returns the number of actions sent."""
    agent = agent or Agent()
    steps = 0
    while max_steps is None or steps < max_steps:
        cells = _read_exact(reader, CELLS_PER_WINDOW)
        if cells is None:
            logger.info("Game stream closed after %d actions", steps)
            break
        window = PerceptionWindow.from_cells(cells.decode("latin-1"))
        action = agent.get_action(window)
        writer.write(action.value.encode("ascii"))
        writer.flush()
        steps += 1
    return steps


def connect(settings: Settings) -> int:
    if settings.port is None:
        raise ValueError("A port is required to connect to the game server.")
    console = Console(stderr=True) if settings.show_map else None
    agent = Agent(console=console)
    logger.info("Connecting to %s:%d", settings.host, settings.port)
    with socket.create_connection((settings.host, settings.port)) as conn:
        with conn.makefile("rb") as reader, conn.makefile("wb") as writer:
            return run_session(reader, writer, agent)


def _read_exact(reader: BinaryIO, size: int) -> bytes | None:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = reader.read(size - len(chunks))
        if not chunk:
            return None
        chunks.extend(chunk)
    return bytes(chunks)
