# tests/test_render.py

from __future__ import annotations

from datetime import date

import pytest

from weeklyctl.engine import render
from weeklyctl.engine.config import StoreConfig
from weeklyctl.engine.model import TaskEntity
from weeklyctl.engine.weekly import WeeklyStore

from .conftest import Clock


def test_task_item_colours_only_on_a_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    task = TaskEntity(description="Write report", originated=date(2024, 3, 13))

    monkeypatch.setattr(render, "_supports_color", lambda: False)
    plain = render.task_item(1, task, color=True)
    assert plain == "1. 2024-03-13|WORK: Write report"

    monkeypatch.setattr(render, "_supports_color", lambda: True)
    coloured = render.task_item(1, task, color=True)
    assert coloured != plain
    assert "\x1b[" in coloured
    assert render.strip_ansi(coloured) == plain


def test_item_without_status() -> None:
    task = TaskEntity(description="x", originated=date(2024, 3, 11), completed=True)
    assert render.task_item_no_status(4, task) == "4. 2024-03-11: x"


def test_verbose_notes_for_empty_week(
    clock: Clock, config: StoreConfig, capsys: pytest.CaptureFixture[str]
) -> None:
    store = WeeklyStore(config)

    render.render_weekly(store)
    assert capsys.readouterr().out.splitlines() == ["Week 11 - 2024-03-11...2024-03-17:"]

    render.render_weekly(store, verbose=True)
    assert "No tasks found." in capsys.readouterr().out

    render.render_summary(store, verbose=True, color=False)
    out = capsys.readouterr().out
    assert "  No completed tasks found." in out
    assert "  No active tasks found." in out


def test_groups_note(capsys: pytest.CaptureFixture[str]) -> None:
    render.render_groups([], verbose=True)
    assert capsys.readouterr().out == "No groups found.\n"
