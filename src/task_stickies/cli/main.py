# src/task_stickies/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs one connector:
- the stdio tool server (default), or
- the interactive console (--console or STICKIES_CONSOLE_ENABLED=1).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from importlib.metadata import PackageNotFoundError, version

from ..cli.bootstrap import create_initial_state
from ..cli.commands import build_registry
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.mcp_connector import run_stdio_server
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return version("task-stickies")
    except PackageNotFoundError:
        return "0.0.0"


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="task-stickies",
        description="Shared file-backed task tree store exposed as agent tools.",
    )
    parser.add_argument("--console", action="store_true", help="run the interactive console instead of the stdio server")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    registry = build_registry(settings.tool_prefix)

    try:
        if args.console or settings.console_enabled:
            asyncio.run(run_console_loop(state, registry))
        else:
            asyncio.run(
                run_stdio_server(state, registry, name=settings.app_name, version=_package_version())
            )
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
