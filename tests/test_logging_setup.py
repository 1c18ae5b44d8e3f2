# tests/test_logging_setup.py

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from sid_companion.logging_setup import resolve_level, setup_logging


@pytest.fixture()
def root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for h in list(root.handlers):
        if h not in saved_handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_resolve_level_accepts_names_and_numbers() -> None:
    assert resolve_level("info") == logging.INFO
    assert resolve_level(" Debug ") == logging.DEBUG
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("chatty") == logging.WARNING
    assert resolve_level("chatty", logging.DEBUG) == logging.DEBUG


def test_repeat_setup_replaces_only_its_own_handlers(
    tmp_path: Path, root_logger: logging.Logger
) -> None:
    foreign = logging.NullHandler()
    root_logger.addHandler(foreign)

    setup_logging(log_dir=tmp_path / "first")
    log_file = setup_logging(log_dir=tmp_path / "second", console_level="error")

    assert foreign in root_logger.handlers
    files = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(files) == 1
    assert Path(files[0].baseFilename) == log_file == tmp_path / "second" / "sid.log"

    streams = [
        h
        for h in root_logger.handlers
        if type(h) is logging.StreamHandler and getattr(h, "_sid_owned", False)
    ]
    assert [h.level for h in streams] == [logging.ERROR]
    root_logger.removeHandler(foreign)


def test_console_filter_hides_third_party_chatter(
    tmp_path: Path, root_logger: logging.Logger
) -> None:
    setup_logging(log_dir=tmp_path, console_level=logging.DEBUG)
    console = next(
        h
        for h in root_logger.handlers
        if type(h) is logging.StreamHandler and getattr(h, "_sid_owned", False)
    )

    def record(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert console.filter(record("sid_companion.tasks.task_codec", logging.DEBUG))
    assert not console.filter(record("urllib3", logging.WARNING))
    assert not console.filter(record("py.warnings", logging.WARNING))
    assert console.filter(record("urllib3", logging.ERROR))
