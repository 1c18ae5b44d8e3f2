# src/sid_companion/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import execute
from ..core.state import AppState
from ..errors import SidError
from .render import frame, greeting, render_console

logger = logging.getLogger(__name__)

InputFn = Callable[[], str]
OutputFn = Callable[[str], None]


def run_console_loop(
    state: AppState,
    *,
    app_name: str = "Sid",
    read_line: InputFn = input,
    write: OutputFn = print,
) -> None:
    """
    Read one command per line until `bye` or end of input.

    Blank lines are ignored. User mistakes are printed framed and the loop
    goes on; an unexpected handler crash is logged and reported the same way.
    """
    logger.info("Console connector started (tasks=%d).", state.tasks.size())
    write(frame(greeting(app_name)))

    while True:
        try:
            line = read_line().strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            break

        if not line:
            continue

        try:
            result = execute(state, line)
        except SidError as e:
            logger.debug("Rejected input: %s", type(e).__name__)
            write(frame(e.message))
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            write(frame("Internal error while handling a command."))
            continue

        write(render_console(result))
        if not result.should_continue:
            logger.info("Console bye received.")
            break

    logger.info("Console connector finished.")
