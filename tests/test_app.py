import io

import pytest
from pydantic import ValidationError

from wayfinder.app import CELLS_PER_WINDOW, run_session
from wayfinder.config import load_settings
from wayfinder.sim.agent_policy import Agent
from wayfinder.sim.errors import InvalidTileKind
from wayfinder.sim.world_state import START


def test_session_answers_each_window_with_one_action() -> None:
    reader = io.BytesIO(b" " * CELLS_PER_WINDOW * 2)
    writer = io.BytesIO()
    agent = Agent()

    steps = run_session(reader, writer, agent)

    assert steps == 2
    assert writer.getvalue() == b"ff"
    assert agent.state.position == (START, START - 2)


def test_session_stops_on_partial_window() -> None:
    reader = io.BytesIO(b" " * (CELLS_PER_WINDOW + 3))
    writer = io.BytesIO()

    assert run_session(reader, writer) == 1
    assert len(writer.getvalue()) == 1


def test_session_respects_step_limit() -> None:
    reader = io.BytesIO(b" " * CELLS_PER_WINDOW * 5)
    writer = io.BytesIO()

    assert run_session(reader, writer, max_steps=3) == 3


def test_session_rejects_non_ascii_cells() -> None:
    reader = io.BytesIO(b"\xff" + b" " * (CELLS_PER_WINDOW - 1))
    writer = io.BytesIO()

    with pytest.raises(InvalidTileKind) as excinfo:
        run_session(reader, writer)

    assert excinfo.value.char == "\xff"
    assert writer.getvalue() == b""


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAYFINDER_PORT", "31415")
    monkeypatch.setenv("WAYFINDER_LOG_LEVEL", "debug")
    monkeypatch.setenv("WAYFINDER_SHOW_MAP", "yes")

    settings = load_settings()
    assert settings.port == 31415
    assert settings.log_level == "DEBUG"
    assert settings.show_map
    assert settings.host == "localhost"

    overridden = load_settings(port=4000, host="game")
    assert overridden.port == 4000
    assert overridden.host == "game"


def test_settings_reject_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WAYFINDER_PORT", raising=False)
    monkeypatch.setenv("WAYFINDER_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        load_settings()

    monkeypatch.setenv("WAYFINDER_LOG_LEVEL", "info")
    with pytest.raises(ValidationError):
        load_settings(port=70000)
    assert load_settings().port is None
