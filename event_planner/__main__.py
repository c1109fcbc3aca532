"""
Run the Event Planner MCP server.

Usage:
    python -m event_planner [--host HOST] [--port PORT] [--log-level LEVEL]

Settings come from the environment / .env (see config.py); command-line
flags override them.
"""

import argparse
import logging
import sys

import uvicorn

from event_planner.app import create_app
from event_planner.config import Settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Event Planner MCP server (Eventbrite)")
    parser.add_argument("--host", help="Interface to bind (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: $PORT or 8787)")
    parser.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    settings = Settings.from_env()
    overrides = {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
