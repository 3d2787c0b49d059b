# src/weeklyctl/engine/weekly.py

"""
Weekly store: the tasks and memo of one calendar week.

Lifecycle:
- construction resolves the requested date to its Monday and loads the
  week's files; a checksum failure or a corrupt record aborts
  construction, so callers never see a half-loaded store;
- mutations are only applied while the store's week is the current
  week (checked on every call) and set the dirty flag;
- `sync()` writes back and refreshes the checksum when dirty, and
  reloads from disk otherwise.

Mutators return booleans instead of raising for policy violations
(not editable, already completed). `open_weekly()` wraps construction
into an `OpenResult` for callers that prefer branching over `except`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import date
from typing import Optional

from . import dates
from .config import StoreConfig
from .errors import ChecksumError, ChecksumMismatch, CorruptTaskRecord
from .location import WeekFiles, resolve_location
from .model import TaskEntity

logger = logging.getLogger(__name__)

Locator = Callable[[StoreConfig, date], WeekFiles]


def _today() -> date:
    """Return today's date (isolated for testability)."""
    return dates.now()


# ---------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------

class WeeklyStore:
    def __init__(
        self,
        config: StoreConfig,
        for_date: Optional[date] = None,
        *,
        locate: Locator = resolve_location,
    ) -> None:
        self._config = config
        self._monday = dates.week_start(for_date or _today())
        self._files = locate(config, self._monday)

        self._tasks: list[TaskEntity] = []
        self._memo = ""
        self._dirty = False

        self.load()

    # -----------------------------------------------------------------
    # Identity / queries
    # -----------------------------------------------------------------

    @property
    def monday(self) -> date:
        return self._monday

    @property
    def sunday(self) -> date:
        return dates.week_end(self._monday)

    @property
    def week_number(self) -> int:
        return dates.week_number(self._monday)

    @property
    def group(self) -> Optional[str]:
        return self._config.group

    @property
    def files(self) -> WeekFiles:
        return self._files

    @property
    def memo(self) -> str:
        return self._memo

    @property
    def tasks(self) -> tuple[TaskEntity, ...]:
        return tuple(self._tasks)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[TaskEntity]:
        return iter(tuple(self._tasks))

    def task_at(self, number: int) -> Optional[TaskEntity]:
        """Return the task with 1-based id `number`, or None."""
        if 1 <= number <= len(self._tasks):
            return self._tasks[number - 1]
        return None

    def is_editable(self) -> bool:
        return dates.week_start(_today()) == self._monday

    # -----------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------

    def add_task(self, description: str) -> bool:
        """
        Append a task dated today.

        Returns the dirty state; a store outside the current week is left
        untouched.
        """
        if not self.is_editable():
            logger.debug("add_task ignored: week %s is not editable", self._monday)
            return self._dirty

        task = TaskEntity(description=description, originated=_today())
        task.validate()

        self._tasks.append(task)
        self._dirty = True
        return self._dirty

    def set_memo(self, text: str) -> bool:
        """Replace the memo text. Same editability rule as add_task."""
        if not self.is_editable():
            logger.debug("set_memo ignored: week %s is not editable", self._monday)
            return self._dirty

        self._memo = text
        self._dirty = True
        return self._dirty

    def mark_task_completed(self, task: TaskEntity) -> bool:
        """
        Complete a task of this store.

        Returns False, changing nothing, if the week is not editable, the
        task belongs elsewhere or it is already completed.
        """
        if not self.is_editable():
            return False
        if not any(t is task for t in self._tasks):
            return False
        if task.completed:
            return False

        task.mark_completed()
        self._dirty = True
        return True

    # -----------------------------------------------------------------
    # Persistence
    # -----------------------------------------------------------------

    def sync(self) -> None:
        """Save local changes, or pick up external ones if there are none."""
        if self._dirty:
            self.save()
            self._files.update_on_changes()
            self._dirty = False
            logger.debug("Week %s synced", self._monday)
        else:
            self.load()

    def load(self) -> None:
        files = self._files

        if not files.check_consistency():
            raise ChecksumMismatch(files.name, "Checksum verification failed")

        try:
            memo = files.read_memo() or ""
            lines = files.read_task_lines() or []
        except UnicodeDecodeError as e:
            raise _undecodable(files.name, e) from e

        tasks: list[TaskEntity] = []
        for i, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                tasks.append(TaskEntity.from_line(line))
            except ValueError as e:
                raise CorruptTaskRecord(files.name, i, line) from e

        self._memo = memo
        self._tasks = tasks
        self._dirty = False
        logger.debug("Week %s loaded: %d task(s)", self._monday, len(tasks))

    def save(self) -> None:
        files = self._files

        if not self._memo:
            files.delete_memo()
        else:
            files.write_memo(self._memo)

        # An empty list never touches the task file, even if one exists.
        if self._tasks:
            files.write_task_lines([t.to_line() for t in self._tasks])


def _undecodable(name: str, e: UnicodeDecodeError) -> CorruptTaskRecord:
    """Point at the line holding the first byte that is not UTF-8."""
    data = bytes(e.object)
    line_no = data.count(b"\n", 0, e.start) + 1
    begin = data.rfind(b"\n", 0, e.start) + 1
    end = data.find(b"\n", e.start)
    raw = data[begin:] if end < 0 else data[begin:end]
    return CorruptTaskRecord(name, line_no, raw.decode("utf-8", errors="replace"))


# ---------------------------------------------------------------------
# Construction result
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OpenResult:
    """
    Outcome of opening a weekly store.

    Exactly one of `store` and `error` is set.
    """

    store: Optional[WeeklyStore] = None
    error: Optional[ChecksumError | CorruptTaskRecord] = None

    @property
    def ok(self) -> bool:
        return self.store is not None


def open_weekly(
    config: StoreConfig,
    for_date: Optional[date] = None,
    *,
    locate: Locator = resolve_location,
) -> OpenResult:
    """
    Construct a WeeklyStore, reporting integrity failures as a result.
    """
    try:
        store = WeeklyStore(config, for_date, locate=locate)
    except (ChecksumError, CorruptTaskRecord) as e:
        logger.warning("Cannot open week of %s: %s", for_date or _today(), e)
        return OpenResult(error=e)
    return OpenResult(store=store)
