# src/weeklyctl/cli.py

"""
Command-line interface for weeklyctl.

This module:
- defines argument parsing and subcommands,
- resolves the store root, group and target date,
- delegates storage and domain logic to engine modules,
- reports errors as messages (never tracebacks).

Options go before the command:

    weeklyctl [-d DATE | -p] [-b DIR] [-g GROUP] [-v] <command> [params]
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from weeklyctl.engine import dates
from weeklyctl.engine.config import StoreConfig, default_root, load_settings
from weeklyctl.engine.errors import (
    AlreadyCompleted,
    CommandError,
    InvalidDateFormat,
    NotEditable,
    WeeklyError,
)
from weeklyctl.engine.render import (
    render_daily,
    render_groups,
    render_memo,
    render_summary,
    render_today,
    render_weekly,
)
from weeklyctl.engine.scan import iter_groups
from weeklyctl.engine.suggest import NearestWordFinder
from weeklyctl.engine.weekly import WeeklyStore, open_weekly
from weeklyctl.logging_setup import setup_logging

logger = logging.getLogger(__name__)

COMMANDS: tuple[str, ...] = (
    "help",
    "weekly",
    "today",
    "daily",
    "memo",
    "set-memo",
    "complete",
    "add",
    "summary",
    "groups",
)


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _build_global_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weeklyctl", add_help=False)

    when = parser.add_mutually_exclusive_group()
    when.add_argument(
        "-d",
        "--date",
        type=str,
        default=None,
        help="Target date YYYY-MM-DD (today or in the past)",
    )
    when.add_argument(
        "-p",
        "--previous-week",
        action="store_true",
        help="Select the previous week instead of a date",
    )

    parser.add_argument(
        "-b",
        "--database-path",
        type=str,
        default=None,
        help="Directory holding weekly files (default: $WEEKLYCTL_HOME or ~/.weeklyctl)",
    )
    parser.add_argument(
        "-g",
        "--group",
        type=str,
        default=None,
        help="Task group to use (a subdirectory of the database path)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print additional notes (e.g. when nothing is found)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    return parser


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weeklyctl",
        description="Weekly plans and reports: one task list and memo per week.",
        parents=[_build_global_parser()],
    )
    sub = parser.add_subparsers(dest="command", metavar="command")

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------

    p_help = sub.add_parser("help", help="Print this help")
    p_help.set_defaults(func=cmd_help, needs_store=False)

    p_weekly = sub.add_parser("weekly", help="List all tasks of the week with their status")
    p_weekly.set_defaults(func=cmd_weekly, needs_store=True)

    p_today = sub.add_parser("today", help="List active tasks created on the selected date")
    p_today.set_defaults(func=cmd_today, needs_store=True)

    p_daily = sub.add_parser("daily", help="List active tasks created up to the selected date")
    p_daily.set_defaults(func=cmd_daily, needs_store=True)

    p_memo = sub.add_parser("memo", help="Show the weekly memo")
    p_memo.set_defaults(func=cmd_memo, needs_store=True)

    p_summary = sub.add_parser("summary", help="Print the weekly report")
    p_summary.set_defaults(func=cmd_summary, needs_store=True)

    p_groups = sub.add_parser("groups", help="List known task groups")
    p_groups.set_defaults(func=cmd_groups, needs_store=False)

    # ------------------------------------------------------------------
    # Write commands (current week only)
    # ------------------------------------------------------------------

    p_set_memo = sub.add_parser("set-memo", help="Replace the weekly memo (empty clears it)")
    p_set_memo.add_argument("text", nargs="?", default="", help="Memo text")
    p_set_memo.set_defaults(func=cmd_set_memo, needs_store=True)

    p_add = sub.add_parser("add", help="Add a task for today")
    p_add.add_argument("description", nargs="*", help="Task description")
    p_add.set_defaults(func=cmd_add, needs_store=True)

    p_complete = sub.add_parser("complete", help="Mark a task completed")
    p_complete.add_argument("task_id", nargs="?", default=None, help="Task number as listed by 'weekly'")
    p_complete.set_defaults(func=cmd_complete, needs_store=True)

    return parser


# ---------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Context:
    """
    Resolved global options shared by all commands.
    """

    config: StoreConfig
    when: date
    verbose: bool
    color: bool
    log_file: Optional[Path] = None

    def info(self, msg: str) -> None:
        if self.verbose:
            print(msg)


def _resolve_date(args: argparse.Namespace) -> date:
    today = dates.now()

    if args.previous_week:
        # Sunday of the previous week
        return dates.shift(dates.week_start(today), -1)

    if args.date:
        try:
            when = dates.parse(args.date)
        except InvalidDateFormat as e:
            raise CommandError(f"cannot parse the date of {args.date}") from e
        if when > today:
            raise CommandError(f"future dates are not supported - {dates.format_date(when)}")
        return when

    return today


def _make_context(args: argparse.Namespace) -> Context:
    root = Path(args.database_path).expanduser() if args.database_path else default_root()
    settings = load_settings(root)

    group = args.group if args.group is not None else settings.group
    try:
        config = StoreConfig(root=root, group=group)
    except ValueError as e:
        raise CommandError(str(e)) from e

    return Context(
        config=config,
        when=_resolve_date(args),
        verbose=bool(args.verbose) or settings.verbose,
        color=not bool(args.no_color),
        log_file=settings.log_path(root),
    )


# ---------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------

def _error(msg: str) -> None:
    print(f"Error: {msg}", file=sys.stderr)


def _open_store(ctx: Context) -> Optional[WeeklyStore]:
    res = open_weekly(ctx.config, ctx.when)
    if res.ok:
        return res.store

    monday = dates.week_start(ctx.when)
    _error(
        f"cannot load database from {ctx.config.store_dir} for "
        f"{dates.format_date(ctx.when)}, week started on {dates.format_date(monday)}"
    )
    print(f"  {res.error}", file=sys.stderr)
    print(
        "Try to check manually .todolist file, or remove .checksum or .memo file "
        "for this date to let the application fix the issue by itself.",
        file=sys.stderr,
    )
    return None


def _require_editable(store: WeeklyStore) -> None:
    if not store.is_editable():
        raise NotEditable("can edit only current weekly plan")


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def cmd_help(args: argparse.Namespace, ctx: Context, store: Optional[WeeklyStore]) -> int:
    _build_parser().print_help()
    return 0


def cmd_weekly(args: argparse.Namespace, ctx: Context, store: WeeklyStore) -> int:
    render_weekly(store, verbose=ctx.verbose, color=ctx.color)
    return 0


def cmd_today(args: argparse.Namespace, ctx: Context, store: WeeklyStore) -> int:
    render_today(store, ctx.when, verbose=ctx.verbose)
    return 0


def cmd_daily(args: argparse.Namespace, ctx: Context, store: WeeklyStore) -> int:
    render_daily(store, ctx.when, verbose=ctx.verbose)
    return 0


def cmd_memo(args: argparse.Namespace, ctx: Context, store: WeeklyStore) -> int:
    render_memo(store, verbose=ctx.verbose)
    return 0


def cmd_summary(args: argparse.Namespace, ctx: Context, store: WeeklyStore) -> int:
    render_summary(store, verbose=ctx.verbose, color=ctx.color)
    return 0


def cmd_groups(args: argparse.Namespace, ctx: Context, store: Optional[WeeklyStore]) -> int:
    render_groups(list(iter_groups(ctx.config.root)), verbose=ctx.verbose)
    return 0


def cmd_set_memo(args: argparse.Namespace, ctx: Context, store: WeeklyStore) -> int:
    _require_editable(store)
    store.set_memo(args.text or "")
    ctx.info("Memo recorded.")
    return 0


def cmd_add(args: argparse.Namespace, ctx: Context, store: WeeklyStore) -> int:
    description = " ".join(args.description or []).strip()
    if not description:
        raise CommandError("operation requires task description")

    _require_editable(store)
    try:
        store.add_task(description)
    except ValueError as e:
        raise CommandError(str(e)) from e
    ctx.info("New task successfully added.")
    return 0


def cmd_complete(args: argparse.Namespace, ctx: Context, store: WeeklyStore) -> int:
    raw = (args.task_id or "").strip()
    if not raw:
        raise CommandError("operation requires task id number")

    _require_editable(store)

    try:
        number = int(raw)
    except ValueError as e:
        raise CommandError(f"cannot parse index value of {raw}") from e

    task = store.task_at(number)
    if task is None:
        raise CommandError(f"wrong task id number - {raw}")

    if task.completed:
        raise AlreadyCompleted(f"cannot complete already completed task (id = {number})")

    store.mark_task_completed(task)
    ctx.info(f"Task with id = {number} is marked completed.")
    return 0


# ---------------------------------------------------------------------
# Dispatch helpers
# ---------------------------------------------------------------------

def _unknown_command(argv: list[str]) -> Optional[str]:
    """
    Return the command token if it is not a known command.

    Global options are consumed first so their values are not mistaken
    for the command.
    """
    _, rest = _build_global_parser().parse_known_args(argv)
    if not rest or rest[0].startswith("-"):
        return None
    cmd = rest[0]
    return None if cmd in COMMANDS else cmd


def _run(args: argparse.Namespace, ctx: Context) -> int:
    store: Optional[WeeklyStore] = None
    if args.needs_store:
        store = _open_store(ctx)
        if store is None:
            return 1

    try:
        rc = args.func(args, ctx, store)
    except (CommandError, NotEditable, AlreadyCompleted) as e:
        _error(str(e))
        rc = 1

    if store is not None:
        try:
            store.sync()
        except (WeeklyError, OSError) as e:
            logger.debug("Sync failed", exc_info=True)
            _error(f"database read/write failed: {e}")
            return 1

    return rc


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    unknown = _unknown_command(argv)
    if unknown is not None:
        _error(f"unknown command {unknown}")
        nearest = NearestWordFinder(COMMANDS).find_nearest(unknown)
        if nearest:
            print(f"Did you mean '{nearest}'?", file=sys.stderr)
        return 2

    parser = _build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        print("No command specified.", file=sys.stderr)
        parser.print_help()
        return 2

    try:
        ctx = _make_context(args)
    except (WeeklyError, OSError) as e:
        _error(str(e))
        return 2

    setup_logging(verbose=ctx.verbose, log_file=ctx.log_file)
    logger.debug("Command %s for %s in %s", args.command, ctx.when, ctx.config.store_dir)

    return _run(args, ctx)


if __name__ == "__main__":
    raise SystemExit(main())
