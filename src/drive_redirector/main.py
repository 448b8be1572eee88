"""CLI entrypoint: load configuration, start the log-level watcher and serve."""

from __future__ import annotations

import argparse
import logging
import os
import sys

import pydantic
import uvicorn
from fastapi import FastAPI

from drive_redirector import __version__
from drive_redirector.config import load_config
from drive_redirector.errors import ConfigError
from drive_redirector.log_level import LOG_LEVEL_ENV, LogLevelWatcher
from drive_redirector.logging import configure_logging
from drive_redirector.server.app import create_app
from drive_redirector.server.config import ServerSettings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drive-redirector",
        description="Redirect / to a Google Drive file that can be repointed at runtime",
    )
    parser.add_argument("--version", action="version", version=f"drive-redirector {__version__}")
    parser.add_argument("--host", default=None, help="Interface to bind (default: REDIRECTOR_HOST)")
    parser.add_argument(
        "--port", type=int, default=None, help="Port to listen on (default: REDIRECTOR_PORT)"
    )
    return parser


def serve(app: FastAPI, *, host: str, port: int) -> None:
    """Run uvicorn until SIGINT/SIGTERM.

    uvicorn owns the signal handlers and stops accepting connections on quit.
    """

    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_config=None))
    server.run()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
        settings = ServerSettings()
    except (ConfigError, pydantic.ValidationError) as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment):", file=sys.stderr)
        print(f"failed to load: {e}", file=sys.stderr)
        return 2

    configure_logging(os.environ.get(LOG_LEVEL_ENV))

    watcher = LogLevelWatcher(interval_seconds=settings.log_level_interval_seconds)
    watcher.start()

    app = create_app(config, settings)
    host = args.host if args.host is not None else settings.host
    port = args.port if args.port is not None else settings.port

    logger.info("listening", extra={"host": host, "port": port})
    logger.info("waiting for quit")
    try:
        serve(app, host=host, port=port)
    finally:
        logger.info("quit received")
        watcher.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
