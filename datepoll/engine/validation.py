"""Validation of parsed events before they become date polls.

Validation is advisory: it reports every problem it finds and never modifies
the event. Callers decide whether to reject, or ask the user to confirm.
"""

from datetime import date, datetime, time
from typing import List, Optional

from datepoll.models.constants import MAX_DATES, MAX_TITLE_LENGTH, MIN_TITLE_LENGTH
from datepoll.models.event import ParsedEvent, ValidationResult


def validate_parsed_event(event: ParsedEvent, *, now: Optional[datetime] = None) -> ValidationResult:
    """Check title length, date count and that no date lies in the past.

    Args:
        event: Parsed event to check
        now: Current moment (defaults to datetime.now()); a date counts as past once its midnight has passed

    Returns:
        ValidationResult with all applicable error messages
    """
    now = now or datetime.now()
    errors: List[str] = []

    if not event.title or len(event.title) < MIN_TITLE_LENGTH:
        errors.append("Event title must be at least 3 characters")

    if len(event.title) > MAX_TITLE_LENGTH:
        errors.append("Event title must be less than 100 characters")

    if len(event.dates) == 0:
        errors.append("At least one date must be specified")

    if len(event.dates) > MAX_DATES:
        errors.append("Maximum of 50 dates allowed")

    if any(datetime.combine(d, time.min) < now for d in event.dates):
        errors.append("All dates must be in the future")

    return ValidationResult(valid=not errors, errors=errors)


def format_date_option(day: date) -> str:
    """Format a date for display, e.g. 'Wed Jan 15, 2025'."""
    return f"{day:%a %b} {day.day}, {day.year}"
