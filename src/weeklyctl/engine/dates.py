# src/weeklyctl/engine/dates.py

"""
Calendar helpers.

Weeks run Monday through Sunday regardless of locale. A week is
identified by its Monday ("week start"), and every date is rendered as
`YYYY-MM-DD`, which is also the persisted form.

Plain `datetime.date` values are used throughout: they are immutable,
always valid and compare by calendar day.
"""

from datetime import date, timedelta
from enum import IntEnum

from .errors import InvalidDateFormat


# ---------------------------------------------------------------------
# Weekdays
# ---------------------------------------------------------------------

class Weekday(IntEnum):
    """
    Day of week as an offset from Monday.

    Matches `date.weekday()`, so Sunday is the last day of the week (6)
    rather than the first.
    """

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


# ---------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------

def now() -> date:
    """Return today's local date."""
    return date.today()


def parse(text: str) -> date:
    """
    Parse `YYYY-MM-DD` into a date.

    Components need not be zero-padded, but there must be exactly three
    of them, all numeric, forming a real calendar date.
    """
    parts = text.strip().split("-")
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidDateFormat(text)

    year, month, day = (int(p) for p in parts)
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateFormat(text) from e


def format_date(d: date) -> str:
    """Render a date as zero-padded `YYYY-MM-DD`."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


# ---------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------

def shift(d: date, days: int) -> date:
    """Return `d` moved by a signed number of days."""
    return d + timedelta(days=days)


def weekday_of(d: date) -> Weekday:
    return Weekday(d.weekday())


def shift_to_weekday(d: date, weekday: Weekday) -> date:
    """
    Return the date in the same Monday-first week as `d` that falls on
    `weekday`.
    """
    return shift(d, int(weekday) - int(weekday_of(d)))


def week_start(d: date) -> date:
    return shift_to_weekday(d, Weekday.MONDAY)


def week_end(d: date) -> date:
    return shift_to_weekday(d, Weekday.SUNDAY)


def week_number(d: date) -> int:
    """
    1-based week of year counted in whole 7-day blocks from January 1st.

    This is not the ISO week number: January 1st is always in week 1.
    """
    day_of_year = d.timetuple().tm_yday
    return (day_of_year - 1) // 7 + 1
