# src/sid_companion/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task list depends on a sink Protocol rather than on the flat-file codec,
so tests can record saves without touching the disk.
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, Protocol

Clock = Callable[[], datetime]
# Returns "now" as a naive local datetime.


class TaskSink(Protocol):
    """Where a task list writes itself after every mutation."""

    def save(self, tasks: Iterable[Any]) -> None: ...
