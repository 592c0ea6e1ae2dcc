#!/usr/bin/env python3
"""
Homeroom -- per-user tasks and weekly class timetables behind session tokens.

Usage:
  python main.py
  python main.py --host 0.0.0.0 --port 8080
  python main.py --reload

Environment variables (see core/config.py for the full list):
  DATABASE_URL   SQLAlchemy URL. Defaults to a SQLite file next to the code.
  TOKEN_HEADER   Header carrying the session token. Default: Token
  LOG_LEVEL      stdlib logging level name. Default: INFO
"""

import argparse

import uvicorn

from core.config import get_settings


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="homeroom",
        description="Serve the Homeroom API.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    args = parser.parse_args()

    settings = get_settings()
    uvicorn.run(
        "asgi:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
