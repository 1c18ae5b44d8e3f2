# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sid_companion.tasks.task_models import Task, render_task


class RecordingSink:
    """
    Fake TaskSink used by task-list and command tests.

    - Counts save calls
    - Keeps a rendered snapshot of the list as it was at each save
    """

    def __init__(self) -> None:
        self.saves: list[list[Task]] = []

    @property
    def save_calls(self) -> int:
        return len(self.saves)

    @property
    def snapshots(self) -> list[str]:
        return ["\n".join(render_task(t) for t in tasks) for tasks in self.saves]

    def save(self, tasks: Iterable[Task]) -> None:
        self.saves.append(list(tasks))


class FixedClock:
    """Deterministic clock for the past-date policy."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class ScriptedInput:
    """Feeds console lines one by one, then behaves like end of input."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)

    def __call__(self) -> str:
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)
