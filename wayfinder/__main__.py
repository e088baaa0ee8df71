"""Module entry point for `python -m wayfinder`."""

from __future__ import annotations

import argparse

from wayfinder.app import connect
from wayfinder.config import configure_logging, load_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Wayfinder game agent.")
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Port of the game server (or WAYFINDER_PORT).",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host of the game server (or WAYFINDER_HOST).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (or WAYFINDER_LOG_LEVEL).",
    )
    parser.add_argument(
        "--show-map",
        action="store_true",
        default=None,
        help="Render the explored map before every new plan.",
    )
    args = parser.parse_args()

    settings = load_settings(
        port=args.port,
        host=args.host,
        log_level=args.log_level,
        show_map=args.show_map,
    )
    configure_logging(settings.log_level)
    if settings.port is None:
        parser.error("a port is required: pass -p PORT or set WAYFINDER_PORT")

    try:
        connect(settings)
    except OSError as exc:
        raise SystemExit(
            f"Could not talk to {settings.host}:{settings.port}: {exc}"
        ) from exc


if __name__ == "__main__":
    main()
