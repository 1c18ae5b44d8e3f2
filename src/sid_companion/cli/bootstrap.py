# src/sid_companion/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it builds storage, loads the task
list bound to that storage and wraps both into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_codec import FlatFileStorage

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    storage = FlatFileStorage(settings.tasks_path)
    tasks = storage.load()
    logger.info("Task list ready path=%s total=%d", storage.path, tasks.size())

    if clock is None:
        return AppState(settings=settings, tasks=tasks)
    return AppState(settings=settings, tasks=tasks, clock=clock)
