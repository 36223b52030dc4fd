"""Event description parsing engine for datepoll."""

from datepoll.engine.local_parser import parse_event_description, parse_date_from_natural_language
from datepoll.engine.llm_parser import parse_event_with_llm, expand_date_ranges
from datepoll.engine.smart_parser import EventParser, parse_event_description_smart, local_confidence
from datepoll.engine.validation import validate_parsed_event, format_date_option

__all__ = [
    "parse_event_description",
    "parse_date_from_natural_language",
    "parse_event_with_llm",
    "expand_date_ranges",
    "EventParser",
    "parse_event_description_smart",
    "local_confidence",
    "validate_parsed_event",
    "format_date_option",
]
