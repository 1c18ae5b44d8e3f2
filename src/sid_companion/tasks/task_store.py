# src/sid_companion/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..core.ports import TaskSink
from ..errors import InvalidIndex, SchedulingConflict
from .task_models import Event, Task, events_overlap, render_task, with_done

logger = logging.getLogger(__name__)

INVALID_TASK_NUMBER = "Not a valid task number!"


class TaskList:
    """
    Ordered in-memory task list.

    - Indices exposed to callers are 1-based and always match current positions
      (deleting #2 makes the old #3 the new #2).
    - Every successful mutation is followed by a full save through the sink.
      Validation runs before the mutation, so a failed call leaves the list as-is.
    - A list built without a sink is detached (search results); mutating it
      raises RuntimeError.
    """

    def __init__(self, tasks: Iterable[Task] = (), sink: TaskSink | None = None) -> None:
        self._tasks: list[Task] = list(tasks)
        self._sink = sink

    # ---- low-level helpers ----

    @property
    def detached(self) -> bool:
        return self._sink is None

    def _persist(self) -> None:
        if self._sink is not None:
            self._sink.save(list(self._tasks))

    def _check_writable(self) -> None:
        if self._sink is None:
            raise RuntimeError("read-only task list cannot be modified")

    def _position(self, task_id: int) -> int:
        i = task_id - 1
        if i < 0 or i >= len(self._tasks):
            raise InvalidIndex(INVALID_TASK_NUMBER)
        return i

    # ---- public API ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def size(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def get(self, task_id: int) -> Task:
        return self._tasks[self._position(task_id)]

    def conflicts_with(self, event: Event) -> list[Event]:
        return [
            t for t in self._tasks if isinstance(t, Event) and events_overlap(event, t)
        ]

    def add(self, task: Task) -> Task:
        self._check_writable()
        if isinstance(task, Event):
            clashes = self.conflicts_with(task)
            if clashes:
                logger.debug(
                    "Event rejected desc=%r clashes=%d", task.description, len(clashes)
                )
                raise SchedulingConflict(clashes)

        self._tasks.append(task)
        logger.debug("Task added kind=%s total=%d", task.kind.value, len(self._tasks))
        self._persist()
        return task

    def mark_done(self, task_id: int) -> Task:
        return self._set_done(task_id, True)

    def unmark_done(self, task_id: int) -> Task:
        return self._set_done(task_id, False)

    def _set_done(self, task_id: int, done: bool) -> Task:
        self._check_writable()
        i = self._position(task_id)
        updated = with_done(self._tasks[i], done)
        self._tasks[i] = updated
        logger.debug("Task #%d done=%s", task_id, done)
        self._persist()
        return updated

    def delete(self, task_id: int) -> Task:
        self._check_writable()
        i = self._position(task_id)
        removed = self._tasks.pop(i)
        logger.debug("Task #%d deleted total=%d", task_id, len(self._tasks))
        self._persist()
        return removed

    def find(self, keyword: str | None) -> TaskList:
        """
        Case-insensitive literal substring search over the rendered task text,
        so dates and kind tags match as well as descriptions.
        """
        if keyword is None or not keyword.strip():
            return TaskList()
        needle = keyword.casefold()
        return TaskList(t for t in self._tasks if needle in render_task(t).casefold())

    def __str__(self) -> str:
        return "\n".join(f"{i}. {render_task(t)}" for i, t in enumerate(self._tasks, start=1))
