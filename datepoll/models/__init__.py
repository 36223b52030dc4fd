"""Data models for datepoll."""

from datepoll.models.event import ParsedEvent, DateRange, LLMParsedEvent, ValidationResult
from datepoll.models.recurrence import Weekday, WEEKENDS, WEEKDAYS, FRI_SUN, ALL_DAYS, weekday_index

__all__ = [
    "ParsedEvent",
    "DateRange",
    "LLMParsedEvent",
    "ValidationResult",
    "Weekday",
    "WEEKENDS",
    "WEEKDAYS",
    "FRI_SUN",
    "ALL_DAYS",
    "weekday_index",
]
