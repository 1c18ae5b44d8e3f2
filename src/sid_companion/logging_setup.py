# src/sid_companion/logging_setup.py

"""
Diagnostic logging for the CLI.

stdout belongs to the framed replies, so log records go to stderr (filtered)
and to a size-capped file under the data directory.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "sid.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second setup replaces only its own.
_OWNED_ATTR = "_sid_owned"


class _ConsoleNoiseFilter(logging.Filter):
    """Own records pass at the handler level; third-party and py.warnings only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "sid_companion" or record.name.startswith("sid_companion."):
            return True
        return record.levelno >= logging.ERROR


def resolve_level(value: int | str, default: int = logging.WARNING) -> int:
    """Accept a level number or name ("info", "DEBUG"); unknown names fall back to `default`."""
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    return level if isinstance(level, int) else default


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(
    path: Path, level: int, formatter: logging.Formatter, max_bytes: int, backups: int
) -> logging.Handler:
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _drop_owned_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if getattr(h, _OWNED_ATTR, False):
            root.removeHandler(h)
            h.close()


def setup_logging(
    *,
    log_dir: str | Path = "data/logs",
    console_level: int | str = logging.WARNING,
    file_level: int | str = logging.DEBUG,
    max_bytes: int = 1_000_000,
    backups: int = 3,
) -> Path:
    """
    Attach the console and file handlers to the root logger and return the log file path.

    Safe to call again: handlers from an earlier call are closed and replaced,
    handlers installed by anyone else are left alone.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    _drop_owned_handlers(root)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers = (
        _console_handler(resolve_level(console_level), formatter),
        _file_handler(log_file, resolve_level(file_level, logging.DEBUG), formatter, max_bytes, backups),
    )
    for h in handlers:
        setattr(h, _OWNED_ATTR, True)
        root.addHandler(h)

    # warnings.warn(...) -> 'py.warnings' logger
    logging.captureWarnings(True)
    return log_file
