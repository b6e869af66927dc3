"""Development entrypoint for the Dominion tick engine."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from dominion.config import get_settings
from dominion.database import init_db
from dominion.schedule import run_daily_cycle, run_hourly_cycle


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Dominion tick engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API (and scheduler, if enabled)")
    serve.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    serve.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    serve.add_argument("--reload", action="store_true", help="Enable autoreload (dev mode)")

    subparsers.add_parser("hourly", help="Run one hourly tick cycle and exit")
    subparsers.add_parser("daily", help="Run one daily tick cycle and exit")
    subparsers.add_parser("init-db", help="Create all tables without migrations")

    args = parser.parse_args()
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        uvicorn.run(
            "dominion.api.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            factory=False,
        )
    elif args.command == "hourly":
        run_hourly_cycle()
    elif args.command == "daily":
        run_daily_cycle()
    elif args.command == "init-db":
        init_db()


if __name__ == "__main__":
    main()
