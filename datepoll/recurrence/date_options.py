"""Date option presets for polls.

Quick-pick generators ("next 3 weekends", "this weekend", "quarterly weekends")
and the ISO/label helpers used when a list of dates becomes poll options.
All generators take an explicit 'today' so results are reproducible.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel

from datepoll.models.recurrence import FRI_SUN, WEEKENDS, Weekday, day_abbreviation, weekday_index
from datepoll.recurrence.expander import generate_date_range


class DateOption(BaseModel):
    id: str
    date: str  # ISO date: "2025-01-10"
    label: str


def format_date_label(iso_date: str) -> str:
    """'2025-01-10' -> 'Fri Jan 10'"""
    day = date.fromisoformat(iso_date)
    return f"{day:%a %b} {day.day}"


def format_date_full(iso_date: str) -> str:
    """'2025-01-10' -> 'Friday, January 10, 2025'"""
    day = date.fromisoformat(iso_date)
    return f"{day:%A, %B} {day.day}, {day.year}"


def get_day_name(day_number: int) -> str:
    return day_abbreviation(day_number)


def generate_dates_in_range(start: date, end: date, days_of_week: Iterable[int]) -> List[str]:
    """ISO strings for every date in [start, end] on one of days_of_week."""
    return [d.isoformat() for d in generate_date_range(start, end, days_of_week)]


def create_date_option(iso_date: str, option_id: Optional[str] = None) -> DateOption:
    return DateOption(
        id=option_id or f"date-{iso_date}",
        date=iso_date,
        label=format_date_label(iso_date),
    )


def generate_date_options(start: date, end: date, days_of_week: Iterable[int]) -> List[DateOption]:
    dates = generate_dates_in_range(start, end, days_of_week)
    return [create_date_option(d, f"date-{i}") for i, d in enumerate(dates)]


def generate_quarterly_weekends(today: Optional[date] = None) -> List[str]:
    """Fri-Sun dates from the first of this month to the end of the month after next."""
    today = today or date.today()
    start = today.replace(day=1)
    end = start + relativedelta(months=3, days=-1)
    return generate_dates_in_range(start, end, FRI_SUN)


def generate_next_weekends(count: int, include_friday: bool = False, today: Optional[date] = None) -> List[str]:
    """Dates for the next `count` weekends, starting with the upcoming one."""
    today = today or date.today()
    pattern = FRI_SUN if include_friday else WEEKENDS
    first_day = Weekday.FRIDAY if include_friday else Weekday.SATURDAY

    current = today
    while weekday_index(current) != first_day:
        current += timedelta(days=1)

    dates: List[str] = []
    weekends_found = 0
    for iso in generate_dates_in_range(current, current + timedelta(days=count * 7), pattern):
        if weekday_index(date.fromisoformat(iso)) == first_day:
            weekends_found += 1
            if weekends_found > count:
                break
        dates.append(iso)
    return dates


def generate_this_weekend(include_friday: bool = True, today: Optional[date] = None) -> List[str]:
    """Next weekend whose first day (Friday or Saturday) falls on or after today, through Sunday."""
    today = today or date.today()
    dow = weekday_index(today)

    first_day = Weekday.FRIDAY if include_friday else Weekday.SATURDAY
    start = today + timedelta(days=(first_day - dow + 7) % 7)
    end = start + timedelta(days=(Weekday.SUNDAY - weekday_index(start) + 7) % 7)

    return generate_dates_in_range(start, end, FRI_SUN if include_friday else WEEKENDS)


def generate_custom_pattern(
    days_of_week: Iterable[int],
    months_ahead: int,
    month_count: int = 1,
    today: Optional[date] = None,
) -> List[str]:
    """Matching dates across `month_count` whole months starting `months_ahead` from now."""
    today = today or date.today()
    start = today.replace(day=1) + relativedelta(months=months_ahead)
    end = start + relativedelta(months=month_count, days=-1)
    return generate_dates_in_range(start, end, days_of_week)
