# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from sid_companion.core.state import AppState
from sid_companion.tasks.task_store import TaskList

from .fakes import FixedClock, RecordingSink

NOW = datetime(2025, 6, 1, 12, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="Sid",
        log_level="WARNING",
        data_dir=tmp_path,
        tasks_path=tmp_path / "data" / "sid.txt",
        log_dir=tmp_path / "logs",
        reject_past_dates=False,
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def state(settings: SimpleNamespace, sink: RecordingSink, clock: FixedClock) -> AppState:
    """
    AppState wired with an in-memory sink and a fixed clock.

    Storage round-trips are covered separately in test_task_codec.py.
    """
    return AppState(settings=settings, tasks=TaskList(sink=sink), clock=clock)
