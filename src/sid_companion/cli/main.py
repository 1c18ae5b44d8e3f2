# src/sid_companion/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then either:
- runs the console REPL (default), or
- answers one line non-interactively (`sid -c "todo buy milk"`), printing the
  plain reply the way a chat surface would show it.
"""

from __future__ import annotations

import argparse
import logging

from ..cli.bootstrap import create_initial_state
from ..cli.commands import respond
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sid", description="Personal task tracker.")
    parser.add_argument(
        "-c",
        "--command",
        action="append",
        default=[],
        metavar="LINE",
        help="Run one command line and print the reply (repeatable); skips the REPL",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    console_level = getattr(settings, "log_level", "WARNING")
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    state = create_initial_state(settings=settings)

    if args.command:
        for line in args.command:
            print(respond(state, line))
        return 0

    run_console_loop(state, app_name=settings.app_name)
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
