# src/sid_companion/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ..core.state import AppState
from ..errors import SidError, UnknownCommand, UsageError
from ..tasks.task_models import Deadline, Event, Task, Todo, format_when, render_task
from ..tasks.task_store import TaskList
from .parsing import parse_index, parse_when, split_marker

logger = logging.getLogger(__name__)

# ---- user-facing texts ----

TODO_USAGE = "Usage: todo <description>"
DEADLINE_USAGE = "You typed it wrong!\nProper usage: deadline <description> /by <yyyy-MM-dd HHmm>"
EVENT_USAGE = "Usage: event <description> /from <yyyy-MM-dd[ HHmm]> /to <yyyy-MM-dd HHmm>"
EVENT_INVALID_TIME_ORDER = "Event end must be on/after start."
MARK_USAGE = "Usage: mark <task-number>"
UNMARK_USAGE = "Usage: unmark <task-number>"
DELETE_USAGE = "What do you want me to delete?\nUsage: delete <task-number>"
FIND_USAGE = "Usage: find <keyword>"

ADDED = "Got it. I've added this task:\n  {task}\nNow you have {total} tasks in the list."
MARKED = "Sweet! Marking this one as done:\n  {task}"
UNMARKED = "Oops, not done yet? I've unmarked:\n  {task}"
DELETED = "Deleted your task:\n  {task}\nNow you have {total} tasks in the list."
LIST_EMPTY = "Nothing on your agenda right now! Ready to get busy?"
LIST_HEADER = "Here's what's keeping you busy:\n"
FIND_HEADER = "Found some matches! Here's what I dug up:\n"
FIND_NO_RESULTS = "Hmm, I couldn't find any tasks matching that. Try a different keyword?"
BYE_MESSAGE = "Byebye! See you next time!"
PAST_DATE = "That's already in the past: {when}"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """
    Outcome of one successful command.

    `message` is the full reply text; `task`, `total` and `found` carry the
    same information in structured form for renderers that want it.
    """

    message: str
    should_continue: bool = True
    task: Task | None = None
    total: int = 0
    found: TaskList | None = None


CommandHandler = Callable[[AppState, str], CommandResult]


class CommandRegistry:
    """Command-word registry: first token picks the handler, the rest is its argument."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._usage: dict[str, str] = {}

    def register(self, name: str, handler: CommandHandler, usage: str) -> None:
        key = name.lower()
        self._handlers[key] = handler
        self._usage[key] = usage

    def names(self) -> list[str]:
        return list(self._handlers)

    def build_help(self) -> str:
        return "Try: " + " | ".join(self._usage.values())

    def handle(self, state: AppState, line: str) -> CommandResult:
        """
        Run one input line against `state`.

        Raises SidError (or a subclass) for anything the user got wrong; the
        task list is left untouched in that case.
        """
        line = line.strip()
        if not line:
            raise UsageError(self.build_help())

        parts = line.split(None, 1)
        name = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownCommand(name, f"Sorry! Can't understand you.\n{self.build_help()}")

        logger.debug("Dispatching %s (arg_len=%d)", name, len(arg))
        return handler(state, arg)


registry = CommandRegistry()


def execute(state: AppState, line: str) -> CommandResult:
    """Raising convention: failures propagate as SidError."""
    return registry.handle(state, line)


def respond(state: AppState, line: str) -> str:
    """String convention: same decisions as execute(), failures become their message."""
    try:
        return execute(state, line).message
    except SidError as e:
        logger.debug("Command rejected: %s", type(e).__name__)
        return e.message


# ---- helpers ----


def _added(state: AppState, task: Task) -> CommandResult:
    state.tasks.add(task)
    total = state.tasks.size()
    return CommandResult(
        ADDED.format(task=render_task(task), total=total), task=task, total=total
    )


def _check_not_past(state: AppState, when: datetime) -> None:
    if state.reject_past_dates and when < state.clock():
        raise UsageError(PAST_DATE.format(when=format_when(when)))


# ---- handlers ----


def cmd_bye(state: AppState, arg: str) -> CommandResult:
    return CommandResult(BYE_MESSAGE, should_continue=False)


def cmd_list(state: AppState, arg: str) -> CommandResult:
    tasks = state.tasks
    if tasks.is_empty():
        return CommandResult(LIST_EMPTY)
    return CommandResult(LIST_HEADER + str(tasks), total=tasks.size())


def cmd_todo(state: AppState, arg: str) -> CommandResult:
    if not arg:
        raise UsageError(TODO_USAGE)
    return _added(state, Todo(arg))


def cmd_deadline(state: AppState, arg: str) -> CommandResult:
    """deadline <description> /by <when>"""
    parts = split_marker(arg, "/by") if arg else None
    if parts is None or not parts[0] or not parts[1]:
        raise UsageError(DEADLINE_USAGE)

    desc, when_text = parts
    due = parse_when(when_text)
    _check_not_past(state, due)
    return _added(state, Deadline(desc, due))


def cmd_event(state: AppState, arg: str) -> CommandResult:
    """event <description> /from <start> /to <end>"""
    head = split_marker(arg, "/from") if arg else None
    if head is None or not head[0]:
        raise UsageError(EVENT_USAGE)

    desc, span = head
    tail = split_marker(span, "/to")
    if tail is None or not tail[0] or not tail[1]:
        raise UsageError(EVENT_USAGE)

    start = parse_when(tail[0])
    end = parse_when(tail[1])
    if end < start:
        raise UsageError(EVENT_INVALID_TIME_ORDER)
    _check_not_past(state, start)
    return _added(state, Event(desc, start, end))


def cmd_mark(state: AppState, arg: str) -> CommandResult:
    if not arg:
        raise UsageError(MARK_USAGE)
    task_id = parse_index(arg, "Please provide a valid number after 'mark'.")
    task = state.tasks.mark_done(task_id)
    return CommandResult(MARKED.format(task=render_task(task)), task=task, total=state.tasks.size())


def cmd_unmark(state: AppState, arg: str) -> CommandResult:
    if not arg:
        raise UsageError(UNMARK_USAGE)
    task_id = parse_index(arg, "Please provide a valid number after 'unmark'.")
    task = state.tasks.unmark_done(task_id)
    return CommandResult(UNMARKED.format(task=render_task(task)), task=task, total=state.tasks.size())


def cmd_delete(state: AppState, arg: str) -> CommandResult:
    if not arg:
        raise UsageError(DELETE_USAGE)
    task_id = parse_index(arg, "Please provide a valid number after 'delete'.")
    task = state.tasks.delete(task_id)
    total = state.tasks.size()
    return CommandResult(
        DELETED.format(task=render_task(task), total=total), task=task, total=total
    )


def cmd_find(state: AppState, arg: str) -> CommandResult:
    if not arg:
        raise UsageError(FIND_USAGE)
    found = state.tasks.find(arg)
    if found.is_empty():
        return CommandResult(FIND_NO_RESULTS, found=found)
    return CommandResult(FIND_HEADER + str(found), total=found.size(), found=found)


registry.register("todo", cmd_todo, usage="todo")
registry.register("deadline", cmd_deadline, usage="deadline")
registry.register("event", cmd_event, usage="event")
registry.register("list", cmd_list, usage="list")
registry.register("mark", cmd_mark, usage="mark <n>")
registry.register("unmark", cmd_unmark, usage="unmark <n>")
registry.register("delete", cmd_delete, usage="delete <n>")
registry.register("find", cmd_find, usage="find <keyword>")
registry.register("bye", cmd_bye, usage="bye")

HELP_MESSAGE = registry.build_help()
