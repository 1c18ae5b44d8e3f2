# src/sid_companion/connectors/render.py

from __future__ import annotations

from ..cli.commands import CommandResult

HR = "_" * 60


def greeting(app_name: str) -> str:
    return f"Hello! I'm {app_name}\nWhat can I do for you?"


def frame(message: str) -> str:
    """Console block: the message between two horizontal rules."""
    return f"{HR}\n{message}\n{HR}"


def render_console(result: CommandResult) -> str:
    return frame(result.message)
