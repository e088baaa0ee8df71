"""Runtime settings loaded from environment variables."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich.logging import RichHandler

DEFAULT_HOST = "localhost"
DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = DEFAULT_HOST
    port: int | None = Field(default=None, ge=1, le=65535)
    log_level: str = DEFAULT_LOG_LEVEL
    show_map: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_settings(**overrides: object) -> Settings:
    """Read WAYFINDER_* variables; explicit non-None overrides win."""
    values: dict[str, object] = {
        "host": os.getenv("WAYFINDER_HOST") or DEFAULT_HOST,
        "log_level": os.getenv("WAYFINDER_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        "show_map": (os.getenv("WAYFINDER_SHOW_MAP") or "").lower() in _TRUE_VALUES,
    }
    port = os.getenv("WAYFINDER_PORT")
    if port:
        values["port"] = port
    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings.model_validate(values)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
