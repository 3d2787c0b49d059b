# src/weeklyctl/engine/model.py

"""
Core domain models.

A task is a single to-do line inside a weekly store. It has no identity
of its own: users refer to it by its 1-based position in the store,
which never changes because tasks are never reordered or removed.

No filesystem access should happen here.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Final

from . import dates
from .errors import AlreadyCompleted

FIELD_SEP: Final[str] = ":"

# Everything str.splitlines() treats as a line boundary.
LINE_BREAKS: Final[frozenset[str]] = frozenset(
    "\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029"
)


# ---------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------

class Status(str, Enum):
    """
    Task status as stored in the task list file.
    """

    ACTIVE = "A"
    COMPLETED = "C"

    @property
    def label(self) -> str:
        return "DONE" if self is Status.COMPLETED else "WORK"


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(slots=True)
class TaskEntity:
    """
    One to-do item.

    Stored as `<YYYY-MM-DD>:<A|C>:<description>`. Colons inside the
    description are not escaped; on reading, everything after the second
    separator is concatenated back together *without* the separators, so
    a description containing ':' comes back with its colons dropped.
    """

    description: str
    originated: date
    completed: bool = False

    # -----------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------

    def validate(self) -> None:
        if not self.description or not self.description.strip():
            raise ValueError("description must be a non-empty string")
        if any(ch in LINE_BREAKS for ch in self.description):
            raise ValueError("description must be a single line")

    # -----------------------------------------------------------------
    # State
    # -----------------------------------------------------------------

    @property
    def status(self) -> Status:
        return Status.COMPLETED if self.completed else Status.ACTIVE

    def mark_completed(self) -> None:
        """One-way transition to completed."""
        if self.completed:
            raise AlreadyCompleted(f"Task already completed: {self.description}")
        self.completed = True

    # -----------------------------------------------------------------
    # Serialisation
    # -----------------------------------------------------------------

    def to_line(self) -> str:
        return FIELD_SEP.join(
            (dates.format_date(self.originated), self.status.value, self.description)
        )

    @classmethod
    def from_line(cls, line: str) -> "TaskEntity":
        """
        Parse one task list line.

        Raises ValueError (InvalidDateFormat for a bad date) if the line
        is not a valid record.
        """
        parts = line.rstrip("\r\n").split(FIELD_SEP)
        if len(parts) < 3:
            raise ValueError(f"Expected '<date>:<status>:<description>', got '{line}'")

        originated = dates.parse(parts[0])

        try:
            status = Status(parts[1])
        except ValueError as e:
            allowed = ", ".join(s.value for s in Status)
            raise ValueError(f"Invalid status '{parts[1]}' (allowed: {allowed})") from e

        task = cls(
            description="".join(parts[2:]),
            originated=originated,
            completed=status is Status.COMPLETED,
        )
        task.validate()
        return task
