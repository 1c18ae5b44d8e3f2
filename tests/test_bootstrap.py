# tests/test_bootstrap.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from sid_companion.cli import main as cli_main
from sid_companion.cli.bootstrap import create_initial_state
from sid_companion.cli.commands import execute
from sid_companion.config import Settings

from .fakes import FixedClock


@pytest.fixture()
def restore_logging():
    """main() reconfigures the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_state_persists_across_restarts(settings: SimpleNamespace, clock: FixedClock) -> None:
    state = create_initial_state(settings=settings, clock=clock)
    assert state.clock is clock
    execute(state, "todo survive restart")
    execute(state, "mark 1")

    assert settings.tasks_path.read_text("utf-8") == "T | 1 | survive restart\n"

    again = create_initial_state(settings=settings)
    assert str(again.tasks) == "1. [T][X] survive restart"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("SID_TASKS_PATH", "SID_LOG_DIR", "SID_APP_NAME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SID_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SID_REJECT_PAST_DATES", "yes")

    s = Settings.from_env()
    assert s.app_name == "Sid"
    assert s.tasks_path == tmp_path / "sid.txt"
    assert s.log_dir == tmp_path / "logs"
    assert s.reject_past_dates is True


def test_main_one_shot_commands(
    monkeypatch: pytest.MonkeyPatch,
    settings: SimpleNamespace,
    capsys: pytest.CaptureFixture[str],
    restore_logging,
) -> None:
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    rc = cli_main.main(["-c", "todo from the shell", "-c", "list", "-c", "mark 9"])

    assert rc == 0
    out = capsys.readouterr().out
    assert "[T][ ] from the shell" in out
    assert "1. [T][ ] from the shell" in out
    assert "Not a valid task number!" in out
    assert (settings.log_dir / "sid.log").exists()
