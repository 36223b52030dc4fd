"""Specialized recurring-event pattern matcher.

PATTERNS is evaluated top to bottom against the raw description and the first
entry whose regex matches wins. When none matches, generic date extraction
runs over the whole string.

Supported phrasings:
- "Hangout weekends for the next 3 months" / "Party weekends over next 2 weeks"
- "Gaming every friday and saturday this week" / "... this and next week"
- "Boys Night every weekend in December" / "Standup every weekday in February 2026"
- "Q1 Hangout - Fridays and Saturdays in January at 7pm"
- anything else parsedatetime understands ("Dinner on Jan 10 and Jan 17 at 7:30pm")
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

from dateutil.relativedelta import relativedelta

from datepoll.integrations.date_extractor import DateExtractor, collect_times, extract_dates_and_times
from datepoll.models.constants import MAX_TITLE_LENGTH
from datepoll.models.recurrence import ALL_DAYS, WEEKDAYS, WEEKENDS, weekday_index
from datepoll.recurrence.expander import generate_date_range, parse_day_of_week

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternResult:
    pattern: str
    dates: List[date] = field(default_factory=list)
    times: List[str] = field(default_factory=list)
    title: Optional[str] = None


Handler = Callable[[Optional[re.Match], str, datetime, DateExtractor], PatternResult]

_DAY = r"(?:sunday|monday|tuesday|wednesday|thursday|friday|saturday)"
_LIST_SEP = r"(?:\s*,\s*and\s+|\s*,\s*|\s+and\s+|\s*&\s*)"
_MONTH = (
    r"(?:january|february|march|april|may|june|july|august|september|october|november|december"
    r"|jan|feb|mar|apr|jun|jul|aug|sep|sept|oct|nov|dec)"
)

WEEKENDS_NEXT_RE = re.compile(
    r"weekends?\s+(?:for|over)\s+(?:the\s+)?next\s+(?P<count>\d+)\s+(?P<unit>months?|weeks?)",
    re.I,
)
EVERY_DAY_THIS_NEXT_RE = re.compile(
    rf"every\s+(?P<days>{_DAY}(?:\s+and\s+{_DAY})*)\s+(?P<timeframe>this|next)\s+"
    rf"(?P<and_next>and\s+next\s+)?(?P<unit>week|month)",
    re.I,
)
EVERY_IN_MONTH_RE = re.compile(
    rf"every\s+(?P<kind>weekend|weekday|day|{_DAY}s?(?:{_LIST_SEP}{_DAY}s?)*)s?\s+in\s+"
    rf"(?P<month>[a-z]+)(?:\s+(?P<year>\d{{4}}))?",
    re.I,
)
PLURAL_DAYS_IN_MONTH_RE = re.compile(
    rf"\b(?P<kind>{_DAY}s(?:{_LIST_SEP}{_DAY}s)*)\s+in\s+(?P<month>{_MONTH})\b(?:\s+(?P<year>\d{{4}}))?",
    re.I,
)

_TRAILING_SEPARATORS_RE = re.compile(r"[\s\-–—:,]+$")
_COMMON_PREFIX_RE = re.compile(
    r"^(event|hangout|gathering|meeting|dinner|lunch)\b[\s:]*[-–—]?[\s:]*", re.I
)


def _title_before(text: str, index: int) -> Optional[str]:
    """Text preceding a match, or None when empty or too long to be a title."""
    candidate = _TRAILING_SEPARATORS_RE.sub("", text[:index].strip())
    if 0 < len(candidate) < MAX_TITLE_LENGTH:
        return candidate
    return None


def _week_bounds(anchor: date) -> tuple[date, date]:
    """Sunday-start week containing anchor."""
    start = anchor - timedelta(days=weekday_index(anchor))
    return start, start + timedelta(days=6)


def _month_bounds(anchor: date) -> tuple[date, date]:
    first = anchor.replace(day=1)
    return first, first + relativedelta(months=1, days=-1)


def _times_after(text: str, m: re.Match, now: datetime, extractor: DateExtractor) -> List[str]:
    return collect_times(extractor.extract(text[m.end():], now))


def _handle_weekends_next(m, text, now, extractor) -> PatternResult:
    count = int(m.group("count"))
    unit = m.group("unit").lower()
    today = now.date()
    if unit.startswith("month"):
        end = today + relativedelta(months=count)
    else:
        end = today + timedelta(weeks=count)
    return PatternResult(
        pattern="weekends_next",
        dates=generate_date_range(today, end, WEEKENDS),
        times=_times_after(text, m, now, extractor),
        title=_title_before(text, m.start()),
    )


def _handle_every_day_this_next(m, text, now, extractor) -> PatternResult:
    days_of_week = parse_day_of_week(m.group("days"))
    unit = m.group("unit").lower()
    is_this = m.group("timeframe").lower() == "this"
    today = now.date()

    if unit == "month":
        anchor = today if is_this else today + relativedelta(months=1)
        start, end = _month_bounds(anchor)
        if is_this:
            # the rest of the current month only
            start = today
        following = _month_bounds(anchor + relativedelta(months=1))
    else:
        anchor = today if is_this else today + timedelta(weeks=1)
        start, end = _week_bounds(anchor)
        following = _week_bounds(anchor + timedelta(weeks=1))

    dates = generate_date_range(start, end, days_of_week)
    if m.group("and_next"):
        dates = sorted(set(dates) | set(generate_date_range(following[0], following[1], days_of_week)))

    return PatternResult(
        pattern="every_day_this_next",
        dates=dates,
        times=_times_after(text, m, now, extractor),
        title=_title_before(text, m.start()),
    )


def _selector_for(kind: str) -> List[int]:
    kind = kind.lower()
    if kind.startswith("weekend"):
        return list(WEEKENDS)
    if kind.startswith("weekday"):
        return list(WEEKDAYS)
    if kind.rstrip("s") == "day":
        return list(ALL_DAYS)
    return parse_day_of_week(kind)


def _resolve_month(m: re.Match, now: datetime, extractor: DateExtractor) -> Optional[date]:
    resolved = extractor.resolve(m.group("month"), now)
    if resolved is None:
        return None
    if m.group("year"):
        return date(int(m.group("year")), resolved.month, 1)
    # parsedatetime rolls the current month over to next year once its first day has passed
    if resolved.month == now.month and resolved.year == now.year + 1:
        return date(now.year, now.month, 1)
    return date(resolved.year, resolved.month, 1)


def _handle_days_in_month(name: str) -> Handler:
    def handler(m, text, now, extractor) -> PatternResult:
        month = _resolve_month(m, now, extractor)
        dates: List[date] = []
        if month is None:
            logger.debug(f"Could not resolve month '{m.group('month')}'")
        else:
            start, end = _month_bounds(month)
            dates = generate_date_range(start, end, _selector_for(m.group("kind")))
        return PatternResult(
            pattern=name,
            dates=dates,
            times=_times_after(text, m, now, extractor),
            title=_title_before(text, m.start()),
        )

    return handler


def _handle_generic(m, text, now, extractor) -> PatternResult:
    occurrences = [o for o in extractor.extract(text, now) if not o.is_vague]
    if not occurrences:
        return PatternResult(pattern="generic")

    dates, times = extract_dates_and_times(occurrences)

    title = None
    candidate = text[: occurrences[0].start].strip()
    cleaned = _TRAILING_SEPARATORS_RE.sub("", _COMMON_PREFIX_RE.sub("", candidate)).strip()
    if 0 < len(cleaned) < MAX_TITLE_LENGTH:
        title = cleaned

    return PatternResult(pattern="generic", dates=dates, times=times, title=title)


PATTERNS: List[tuple[str, re.Pattern, Handler]] = [
    ("weekends_next", WEEKENDS_NEXT_RE, _handle_weekends_next),
    ("every_day_this_next", EVERY_DAY_THIS_NEXT_RE, _handle_every_day_this_next),
    ("every_in_month", EVERY_IN_MONTH_RE, _handle_days_in_month("every_in_month")),
    ("plural_days_in_month", PLURAL_DAYS_IN_MONTH_RE, _handle_days_in_month("plural_days_in_month")),
]


def match_patterns(text: str, now: datetime, extractor: DateExtractor) -> PatternResult:
    """Run the first pattern that matches text, falling back to generic extraction."""
    for name, regex, handler in PATTERNS:
        m = regex.search(text)
        if m:
            logger.debug(f"Pattern '{name}' matched at index {m.start()}")
            return handler(m, text, now, extractor)
    return _handle_generic(None, text, now, extractor)
