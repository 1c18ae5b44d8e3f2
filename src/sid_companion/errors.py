# src/sid_companion/errors.py

"""
Error hierarchy for the task tracker.

Every user-input failure is a SidError carrying a message that can be shown
as-is. Raising an error never prints anything; presentation happens at the
surface that catches it (console loop, chat connector).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tasks.task_models import Task


class SidError(Exception):
    """Base error for anything the user can fix by retyping the command."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UsageError(SidError):
    """Missing or malformed command arguments."""


class ParseError(SidError):
    """Date/time text that none of the accepted formats understands."""

    def __init__(self, text: str, message: str) -> None:
        super().__init__(message)
        self.text = text


class InvalidIndex(SidError):
    """Task number is non-numeric, non-positive or outside the list."""


class SchedulingConflict(SidError):
    """A new event overlaps one or more existing events."""

    def __init__(self, conflicts: Sequence[Task]) -> None:
        names = ", ".join(t.description for t in conflicts)
        super().__init__(f"This event clashes with: {names}")
        self.conflicts = list(conflicts)


class UnknownCommand(SidError):
    """The first token of the line is not a known command."""

    def __init__(self, command: str, message: str) -> None:
        super().__init__(message)
        self.command = command


class PersistenceWarning(SidError):
    """
    A single stored record could not be read back.

    Raised by the codec for one line and handled by the loader, which logs and
    skips the line.
    """
