"""Weekday selector models for datepoll.

Weekday indices follow the calendar convention used across the app and by the
language model prompt: 0 = Sunday ... 6 = Saturday. Python's date.weekday() is
Monday-based, so always convert with weekday_index().
"""

from __future__ import annotations

from datetime import date
from enum import IntEnum
from typing import Iterable, List


class Weekday(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


# Common weekday selectors
WEEKENDS: tuple[int, ...] = (Weekday.SATURDAY, Weekday.SUNDAY)
FRI_SUN: tuple[int, ...] = (Weekday.FRIDAY, Weekday.SATURDAY, Weekday.SUNDAY)
WEEKDAYS: tuple[int, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)
ALL_DAYS: tuple[int, ...] = tuple(Weekday)

_DAY_ABBREVIATIONS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def weekday_index(day: date) -> int:
    """Return the Sunday-based weekday index (0-6) for a date."""
    # Python weekday: Monday=0 ... Sunday=6
    return (day.weekday() + 1) % 7


def day_abbreviation(index: int) -> str:
    """Short day name for a weekday index, or '' when out of range."""
    if 0 <= index < len(_DAY_ABBREVIATIONS):
        return _DAY_ABBREVIATIONS[index]
    return ""


def normalize_selector(days: Iterable[int]) -> List[int]:
    """Deduplicate a weekday selector and sort it ascending."""
    return sorted({int(d) for d in days})
