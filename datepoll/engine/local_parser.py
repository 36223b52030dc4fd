"""Deterministic parser for event descriptions.

This module converts casual user text into a ParsedEvent without any network calls.
It must be deterministic: same input and same 'now' -> same output.

Examples:
- "Q1 2025 Hangout every weekend in January"
- "Movie night next Friday at 7pm"
- "Dinner on Jan 10, Jan 17, and Jan 24 at 7:30pm"
- "Hangout weekends for the next 3 months"
- "Party every friday and saturday this and next week"
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from datepoll.integrations.date_extractor import DateExtractor
from datepoll.models.constants import FALLBACK_TITLE_WORDS
from datepoll.models.event import ParsedEvent
from datepoll.recurrence.patterns import match_patterns

logger = logging.getLogger(__name__)


def _fallback_title(text: str) -> str:
    return " ".join(text.split()[:FALLBACK_TITLE_WORDS])


def parse_event_description(
    text: str,
    *,
    now: Optional[datetime] = None,
    extractor: Optional[DateExtractor] = None,
) -> ParsedEvent:
    """Parse a natural language event description.

    Never raises for unparseable input: no recognizable dates simply yields
    an empty dates list and a best-effort title.
    """
    now = now or datetime.now()
    raw = text or ""
    extractor = extractor or DateExtractor()

    result = match_patterns(raw, now, extractor)
    title = result.title or _fallback_title(raw)

    logger.debug(
        f"Local parse via '{result.pattern}': {len(result.dates)} date(s), {len(result.times)} time(s)"
    )
    return ParsedEvent(
        title=title,
        dates=sorted(set(result.dates)),
        times=list(result.times),
        description="",
        raw=raw,
    )


def parse_date_from_natural_language(text: str, *, now: Optional[datetime] = None) -> List[str]:
    """Parse input and return the matching dates as ISO strings (YYYY-MM-DD)."""
    parsed = parse_event_description(text, now=now)
    return [d.isoformat() for d in parsed.dates]
