# src/weeklyctl/engine/errors.py

"""
Error kinds raised by the engine.

Load-time failures (checksum, corrupt records) are fatal for the store
instance that hit them. Policy violations (not editable, already
completed) are reported by the CLI; the store itself answers them with
boolean results instead of raising.
"""

from dataclasses import dataclass


class WeeklyError(Exception):
    """Base class for all weeklyctl errors."""


# ---------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------

class InvalidDateFormat(WeeklyError, ValueError):
    """
    Raised when date text is not a valid `YYYY-MM-DD` calendar date.
    """

    def __init__(self, text: str) -> None:
        super().__init__(f"Cannot parse date '{text}' (expected YYYY-MM-DD)")
        self.text = text


# ---------------------------------------------------------------------
# Store integrity
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ChecksumError(WeeklyError):
    """
    Raised when the stored checksum cannot be read or parsed.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True, slots=True)
class ChecksumMismatch(ChecksumError):
    """
    Raised when the stored checksum differs from the one computed over
    the memo and task list files.
    """


@dataclass(frozen=True, slots=True)
class CorruptTaskRecord(WeeklyError):
    """
    Raised when a persisted task line cannot be parsed.
    """

    path: str
    line_no: int
    line: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line_no}: cannot parse task record '{self.line}'"


# ---------------------------------------------------------------------
# Editing policy
# ---------------------------------------------------------------------

class NotEditable(WeeklyError):
    """Only the current week can be edited."""


class AlreadyCompleted(WeeklyError):
    """A completed task cannot be completed again."""


class CommandError(WeeklyError):
    """
    Invalid user input for a command (bad id, missing description, ...).
    """


# ---------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConfigError(WeeklyError):
    """
    Raised when the settings file is unreadable or malformed.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
