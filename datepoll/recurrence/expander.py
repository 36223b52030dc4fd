"""Weekday lexing and recurrence expansion.

generate_date_range() walks the calendar one day at a time rather than doing
closed-form weekday arithmetic, so month lengths and leap years need no special
casing.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Union

from datepoll.models.recurrence import Weekday, normalize_selector, weekday_index

DateLike = Union[date, datetime]

_DAY_NAMES: list[tuple[str, Weekday]] = [
    ("sunday", Weekday.SUNDAY),
    ("sun", Weekday.SUNDAY),
    ("monday", Weekday.MONDAY),
    ("mon", Weekday.MONDAY),
    ("tuesday", Weekday.TUESDAY),
    ("tue", Weekday.TUESDAY),
    ("wednesday", Weekday.WEDNESDAY),
    ("wed", Weekday.WEDNESDAY),
    ("thursday", Weekday.THURSDAY),
    ("thu", Weekday.THURSDAY),
    ("friday", Weekday.FRIDAY),
    ("fri", Weekday.FRIDAY),
    ("saturday", Weekday.SATURDAY),
    ("sat", Weekday.SATURDAY),
]


def parse_day_of_week(text: str) -> List[int]:
    """Extract all mentioned weekdays as Sunday-based indices (deduped, ascending).

    Matching is substring based, so "fridays" and "fri" both count as Friday.
    """
    lower = (text or "").lower()
    return normalize_selector(day for name, day in _DAY_NAMES if name in lower)


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _daterange(start: date, end_inclusive: date) -> Iterable[date]:
    cur = start
    while cur <= end_inclusive:
        yield cur
        cur = cur + timedelta(days=1)


def generate_date_range(start: DateLike, end: DateLike, days_of_week: Iterable[int]) -> List[date]:
    """Enumerate dates in [start, end] whose weekday index is in days_of_week.

    Returns an empty list for an empty selector or when start > end.
    """
    selector = set(days_of_week)
    if not selector:
        return []
    return [day for day in _daterange(_as_date(start), _as_date(end)) if weekday_index(day) in selector]
