"""Generic natural-language date/time extraction.

Thin wrapper around parsedatetime. The rest of the engine only sees
DateOccurrence tuples and never calls parsedatetime directly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Tuple

import parsedatetime

logger = logging.getLogger(__name__)

# Time-of-day words that parsedatetime resolves on their own ("movie night", "dinner").
_TIME_WORDS = r"night|morning|evening|afternoon|breakfast|lunch|dinner"
_VAGUE_TIME_RE = re.compile(rf"^({_TIME_WORDS})$", re.I)
_LEADING_TIME_WORD_RE = re.compile(rf"^({_TIME_WORDS})\s+", re.I)
# parsedatetime also reports hour certainty for implied times ("saturday morning" -> 06:00)
_EXPLICIT_TIME_RE = re.compile(
    r"\d\s*(?:am|pm|a\.m\.|p\.m\.)|\d:\d\d|\bat\s+\d|\b(?:noon|midday|midnight)\b|o'clock",
    re.I,
)


@dataclass(frozen=True)
class DateOccurrence:
    """One date/time mention found in free text."""

    text: str
    start: int
    end: int
    value: datetime
    has_date: bool
    has_time: bool

    @property
    def is_vague(self) -> bool:
        """Bare time-of-day word without day-level certainty."""
        return bool(_VAGUE_TIME_RE.match(self.text.strip())) and not self.has_date


def format_time(value: datetime) -> str:
    """Format a datetime as a 12-hour display time, e.g. '7:00 PM'."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


class DateExtractor:
    """Extract dates and times from prose, anchored on a caller-supplied 'now'."""

    def __init__(self, calendar: Optional[parsedatetime.Calendar] = None):
        self.calendar = calendar or parsedatetime.Calendar(version=parsedatetime.VERSION_CONTEXT_STYLE)

    def extract(self, text: str, now: datetime) -> List[DateOccurrence]:
        """Return every date/time mention in text, in order of appearance."""
        if not text or not text.strip():
            return []

        results = self.calendar.nlp(text, sourceTime=now)
        if not results:
            return []

        occurrences: List[DateOccurrence] = []
        for value, context, start, end, matched in results:
            # "night next friday at 7pm" -> "next friday at 7pm"; the word belongs to the title
            lead = _LEADING_TIME_WORD_RE.match(matched)
            if lead:
                remainder = matched[lead.end():]
                struct, rest_context = self.calendar.parse(remainder, sourceTime=now)
                if rest_context.hasDateOrTime:
                    value, context = datetime(*struct[:6]), rest_context
                    start, matched = start + lead.end(), remainder
            occurrences.append(
                DateOccurrence(
                    text=matched,
                    start=start,
                    end=end,
                    value=value,
                    has_date=bool(context.hasDate),
                    has_time=bool(context.hasTime) and bool(_EXPLICIT_TIME_RE.search(matched)),
                )
            )
        logger.debug(f"Extracted {len(occurrences)} date mention(s) from input")
        return occurrences

    def resolve(self, phrase: str, now: datetime) -> Optional[datetime]:
        """Resolve a short phrase ("march", "next week") to a single datetime."""
        if not phrase or not phrase.strip():
            return None
        struct, context = self.calendar.parse(phrase, sourceTime=now)
        if not context.hasDateOrTime:
            return None
        return datetime(*struct[:6])


def extract_dates_and_times(
    occurrences: List[DateOccurrence],
) -> Tuple[List[date], List[str]]:
    """Collect calendar days and display times from extracted occurrences.

    Vague time-of-day mentions are skipped. Days are deduplicated and sorted;
    times keep first-seen order.
    """
    days: set[date] = set()
    times: List[str] = []
    for occurrence in occurrences:
        if occurrence.is_vague:
            logger.debug(f"Skipping vague time reference '{occurrence.text}'")
            continue
        days.add(occurrence.value.date())
        if occurrence.has_time:
            display = format_time(occurrence.value)
            if display not in times:
                times.append(display)
    return sorted(days), times


def collect_times(occurrences: List[DateOccurrence]) -> List[str]:
    """Display times for occurrences with hour-level certainty only."""
    times: List[str] = []
    for occurrence in occurrences:
        if occurrence.has_time and not occurrence.is_vague:
            display = format_time(occurrence.value)
            if display not in times:
                times.append(display)
    return times
