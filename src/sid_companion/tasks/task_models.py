# src/sid_companion/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, time
from enum import StrEnum
from typing import ClassVar, TypeAlias

DATE_FMT = "%b %d %Y"
DATE_TIME_FMT = "%b %d %Y %H:%M"


class TaskKind(StrEnum):
    """
    Task variant tag.

    The value is the one-letter code used both on screen ("[T]") and in the
    save file ("T | 0 | ...").
    """

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"

    @classmethod
    def from_code(cls, raw: str | None) -> TaskKind:
        if not raw:
            raise ValueError("missing task kind code")
        try:
            return cls(raw.strip())
        except ValueError:
            raise ValueError(f"Unknown task kind code: {raw}") from None


def _require_description(description: str) -> None:
    if not description or not description.strip():
        raise ValueError("description is required")


@dataclass(frozen=True, slots=True)
class Todo:
    description: str
    done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.TODO

    def __post_init__(self) -> None:
        _require_description(self.description)


@dataclass(frozen=True, slots=True)
class Deadline:
    description: str
    due: datetime
    done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.DEADLINE

    def __post_init__(self) -> None:
        _require_description(self.description)


@dataclass(frozen=True, slots=True)
class Event:
    description: str
    start: datetime
    end: datetime
    done: bool = False

    kind: ClassVar[TaskKind] = TaskKind.EVENT

    def __post_init__(self) -> None:
        _require_description(self.description)
        # Zero-length events are fine.
        if self.end < self.start:
            raise ValueError("event end must be on/after start")


Task: TypeAlias = Todo | Deadline | Event


def format_when(dt: datetime) -> str:
    """Date only when the time is exactly midnight, date and time otherwise."""
    if dt.time() == time(0, 0):
        return dt.strftime(DATE_FMT)
    return dt.strftime(DATE_TIME_FMT)


def render_task(task: Task) -> str:
    """
    Display form of a task:

      [T][ ] read book
      [D][X] return book (by: Dec 02 2019 18:00)
      [E][ ] project meeting (from: Aug 06 2019 14:00, to: Aug 06 2019 16:00)
    """
    mark = "X" if task.done else " "
    base = f"[{task.kind.value}][{mark}] {task.description}"

    match task.kind:
        case TaskKind.DEADLINE:
            return f"{base} (by: {format_when(task.due)})"  # type: ignore[union-attr]
        case TaskKind.EVENT:
            start = format_when(task.start)  # type: ignore[union-attr]
            end = format_when(task.end)  # type: ignore[union-attr]
            return f"{base} (from: {start}, to: {end})"
        case _:
            return base


def with_done(task: Task, done: bool) -> Task:
    """Copy of `task` with only the done flag changed."""
    return replace(task, done=done)


def events_overlap(a: Event, b: Event) -> bool:
    """Half-open overlap: [09:00, 10:00) and [10:00, 11:00) do not clash."""
    return a.start < b.end and a.end > b.start
