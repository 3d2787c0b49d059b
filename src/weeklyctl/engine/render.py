# src/weeklyctl/engine/render.py

"""
Rendering helpers for CLI output.

This module is responsible for:
- week header and full task listing (weekly),
- active task plans (today / daily),
- weekly report (summary) and memo view.

It is presentation-only: it reads a WeeklyStore but never mutates it or
touches files. "Nothing found" notes are only printed when `verbose`.
"""

from __future__ import annotations

import re
import sys
from datetime import date

from .dates import format_date
from .model import Status, TaskEntity
from .weekly import WeeklyStore


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_RESET = "\033[0m"
_BOLD = "\033[1m"

_COLOR = {
    Status.ACTIVE: "\033[32m",     # green
    Status.COMPLETED: "\033[90m",  # grey
}


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    return sys.stdout.isatty()


def strip_ansi(s: str) -> str:
    return _ANSI_RE.sub("", s)


def _info(msg: str, verbose: bool) -> None:
    if verbose:
        print(msg)


# ---------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------

def week_header(store: WeeklyStore) -> str:
    """Format: `Week N - <monday>...<sunday>:`"""
    return (
        f"Week {store.week_number} - "
        f"{format_date(store.monday)}...{format_date(store.sunday)}:"
    )


def task_item(number: int, task: TaskEntity, *, color: bool = False) -> str:
    """Format: `N. <date>|DONE: description` (or WORK)."""
    label = task.status.label
    if color and _supports_color():
        label = f"{_COLOR[task.status]}{label}{_RESET}"
    return f"{number}. {format_date(task.originated)}|{label}: {task.description}"


def task_item_no_status(number: int, task: TaskEntity) -> str:
    return f"{number}. {format_date(task.originated)}: {task.description}"


# ---------------------------------------------------------------------
# Commands output
# ---------------------------------------------------------------------

def render_weekly(store: WeeklyStore, *, verbose: bool = False, color: bool = True) -> None:
    print(week_header(store))

    for i, task in enumerate(store, start=1):
        print(task_item(i, task, color=color))

    if not len(store):
        _info("No tasks found.", verbose)


def render_today(store: WeeklyStore, when: date, *, verbose: bool = False) -> None:
    """Active tasks created exactly on `when`."""
    count = 0
    for i, task in enumerate(store, start=1):
        if task.completed or task.originated != when:
            continue
        if count == 0:
            print(f"Active tasks scheduled on {format_date(when)}:")
        print(task_item_no_status(i, task))
        count += 1

    if count == 0:
        _info(f"No active tasks found for {format_date(when)}.", verbose)


def render_daily(store: WeeklyStore, when: date, *, verbose: bool = False) -> None:
    """Active tasks created on or before `when`: the proposed plan."""
    count = 0
    for i, task in enumerate(store, start=1):
        if task.completed or task.originated > when:
            continue
        if count == 0:
            print(f"Proposed todo plan up to {format_date(when)}:")
        print(task_item_no_status(i, task))
        count += 1

    if count == 0:
        _info(f"No active tasks found up to {format_date(when)}.", verbose)


def render_summary(store: WeeklyStore, *, verbose: bool = False, color: bool = True) -> None:
    """
    Weekly report with two sections: completed and still open tasks.
    """

    def heading(s: str) -> str:
        return f"{_BOLD}{s}{_RESET}" if color and _supports_color() else s

    print(week_header(store))

    completed = [t for t in store if t.completed]
    active = [t for t in store if not t.completed]

    print(heading("COMPLETED:"))
    for task in completed:
        print(f"- {task.description}")
    if not completed:
        _info("  No completed tasks found.", verbose)

    print(heading("UNCOMPLETED TASKS OR OPPORTUNITIES:"))
    for task in active:
        print(f"- {task.description}")
    if not active:
        _info("  No active tasks found.", verbose)


def render_memo(store: WeeklyStore, *, verbose: bool = False) -> None:
    print(week_header(store))

    if not store.memo:
        _info("No memo record found for this week.", verbose)
        return

    print("Memo text:")
    print(store.memo, end="" if store.memo.endswith("\n") else "\n")


def render_groups(groups: list[str], *, verbose: bool = False) -> None:
    for name in groups:
        print(name)

    if not groups:
        _info("No groups found.", verbose)
