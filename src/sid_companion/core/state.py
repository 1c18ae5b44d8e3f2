# src/sid_companion/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..tasks.task_store import TaskList
from .ports import Clock


@dataclass
class AppState:
    """
    Everything a command handler may touch, passed in explicitly.

    `settings` only needs `reject_past_dates`; tests pass a SimpleNamespace.
    """

    settings: object
    tasks: TaskList
    clock: Clock = field(default=datetime.now)

    @property
    def reject_past_dates(self) -> bool:
        return bool(getattr(self.settings, "reject_past_dates", False))
