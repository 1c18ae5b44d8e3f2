# src/sid_companion/tasks/task_codec.py

"""
Flat-file persistence for the task list.

One record per line, pipe-separated, optional whitespace around separators:

  T | 1 | read book
  D | 0 | return book | 2019-12-02T18:00
  E | 0 | project meeting | 2019-08-06T14:00 | 2019-08-06T16:00

A "|" inside a description is stored as "\\|" and a backslash as "\\\\".

Load is forgiving (missing or unreadable file = empty list, corrupt or
non-UTF-8 lines are logged and skipped). Save rewrites the whole file and
never raises on I/O errors: the in-memory change has already happened, the
failure is only logged and the temp file is removed.
"""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from ..errors import PersistenceWarning
from .task_models import Deadline, Event, Task, TaskKind, Todo
from .task_store import TaskList

logger = logging.getLogger(__name__)

FIELD_SEP = " | "
ESCAPE = "\\"

DONE_FLAG = "1"
NOT_DONE_FLAG = "0"

MIN_FIELDS = 3  # kind, done flag, description
DEADLINE_FIELDS = 4
EVENT_FIELDS = 5


def _format_iso(dt: datetime) -> str:
    if dt.second == 0 and dt.microsecond == 0:
        return dt.isoformat(timespec="minutes")
    return dt.isoformat()


def _parse_iso(raw: str, what: str) -> datetime:
    try:
        return datetime.fromisoformat(raw.strip())
    except ValueError:
        raise PersistenceWarning(f"Bad {what} date: {raw}") from None


def _escape(text: str) -> str:
    return text.replace(ESCAPE, ESCAPE * 2).replace("|", ESCAPE + "|")


def _split_fields(line: str) -> list[str]:
    """
    Split a record on unescaped pipes and strip each field.

    "\\|" is a literal pipe and "\\\\" a literal backslash; a backslash before
    anything else is kept as-is, so older files read back unchanged.
    """
    fields: list[str] = []
    buf: list[str] = []
    chars = iter(line)
    for ch in chars:
        if ch == ESCAPE:
            nxt = next(chars, "")
            if nxt not in (ESCAPE, "|"):
                buf.append(ch)
            buf.append(nxt)
        elif ch == "|":
            fields.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    fields.append("".join(buf).strip())
    return fields


def _decode_line(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PersistenceWarning(f"Not valid UTF-8 at byte {e.start}") from None


def serialize_task(task: Task) -> str:
    done = DONE_FLAG if task.done else NOT_DONE_FLAG
    fields = [task.kind.value, done, _escape(task.description)]

    match task.kind:
        case TaskKind.DEADLINE:
            fields.append(_format_iso(task.due))  # type: ignore[union-attr]
        case TaskKind.EVENT:
            fields.append(_format_iso(task.start))  # type: ignore[union-attr]
            fields.append(_format_iso(task.end))  # type: ignore[union-attr]

    return FIELD_SEP.join(fields)


def deserialize_line(line: str) -> Task:
    """Parse one stored record. Raises PersistenceWarning if the line is unusable."""
    parts = _split_fields(line)
    if len(parts) < MIN_FIELDS:
        raise PersistenceWarning("Too few fields")

    try:
        kind = TaskKind.from_code(parts[0])
    except ValueError as e:
        raise PersistenceWarning(str(e)) from None

    done_flag = parts[1].strip()
    if done_flag not in (DONE_FLAG, NOT_DONE_FLAG):
        raise PersistenceWarning(f"Invalid done flag: {done_flag}")
    done = done_flag == DONE_FLAG
    description = parts[2].strip()

    try:
        if kind is TaskKind.DEADLINE:
            if len(parts) < DEADLINE_FIELDS:
                raise PersistenceWarning("Deadline missing 'by' field")
            return Deadline(description, _parse_iso(parts[3], "due"), done=done)

        if kind is TaskKind.EVENT:
            if len(parts) < EVENT_FIELDS:
                raise PersistenceWarning("Event missing start/end fields")
            start = _parse_iso(parts[3], "start")
            end = _parse_iso(parts[4], "end")
            return Event(description, start, end, done=done)

        return Todo(description, done=done)
    except ValueError as e:
        # Model invariants (empty description, end before start).
        raise PersistenceWarning(str(e)) from None


class FlatFileStorage:
    """Task sink backed by a UTF-8 text file (default: data/sid.txt)."""

    def __init__(self, path: str | Path = "data/sid.txt") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TaskList:
        """Read the file into a TaskList bound to this storage."""
        if not self._path.exists():
            logger.info("No task file at %s yet; starting empty.", self._path)
            return TaskList(sink=self)

        try:
            data = self._path.read_bytes()
        except OSError:
            logger.warning("Cannot read task file %s; starting empty.", self._path, exc_info=True)
            return TaskList(sink=self)

        tasks: list[Task] = []
        skipped = 0
        for lineno, raw in enumerate(data.splitlines(), start=1):
            # Decoded per line so one bad byte only costs its own record.
            try:
                line = _decode_line(raw).strip()
                if not line:
                    continue
                tasks.append(deserialize_line(line))
            except PersistenceWarning as e:
                skipped += 1
                logger.warning(
                    "Skipping corrupted line %d in %s: %r (%s)",
                    lineno,
                    self._path,
                    raw,
                    e.message,
                )

        logger.info("Loaded %d tasks from %s (skipped=%d)", len(tasks), self._path, skipped)
        return TaskList(tasks, sink=self)

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the file with one line per task, in list order."""
        path = self._path
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            body = "".join(serialize_task(t) + "\n" for t in tasks)
            tmp.write_text(body, "utf-8")
            os.replace(tmp, path)
            logger.debug("Saved tasks to %s", path)
        except OSError:
            logger.warning("Failed to save tasks to %s", path, exc_info=True)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
