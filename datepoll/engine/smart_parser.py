"""Tiered event description parsing.

This is the entry point callers (command handlers, HTTP endpoints) should use.

1. Run the deterministic local parser (fast, free)
2. Return it immediately when its confidence >= LOCAL_CONFIDENCE_THRESHOLD
3. Otherwise ask the language model; accept it when confidence >= LLM_CONFIDENCE_THRESHOLD
4. Fall back to the local result on low confidence or any failure
"""

import logging
from datetime import datetime
from typing import List, Optional

from datepoll.engine.llm_parser import expand_date_ranges, parse_event_with_llm
from datepoll.engine.local_parser import parse_event_description
from datepoll.integrations.date_extractor import DateExtractor
from datepoll.integrations.openai_client import InferenceClient, OpenAIClient
from datepoll.models.constants import (
    LLM_CONFIDENCE_THRESHOLD,
    LOCAL_CONFIDENCE_DATES_ONLY,
    LOCAL_CONFIDENCE_FULL,
    LOCAL_CONFIDENCE_NONE,
    LOCAL_CONFIDENCE_THRESHOLD,
    MAX_TITLE_LENGTH,
)
from datepoll.models.event import LLMParsedEvent, ParsedEvent

logger = logging.getLogger(__name__)


def local_confidence(event: ParsedEvent) -> float:
    """Heuristic confidence for a local parse result."""
    has_good_title = 2 < len(event.title) < MAX_TITLE_LENGTH
    has_dates = len(event.dates) > 0
    if has_good_title and has_dates:
        return LOCAL_CONFIDENCE_FULL
    if has_dates:
        return LOCAL_CONFIDENCE_DATES_ONLY
    return LOCAL_CONFIDENCE_NONE


def llm_result_to_parsed_event(result: LLMParsedEvent, raw: str) -> ParsedEvent:
    """Convert a fallback result to the ParsedEvent shape callers expect."""
    times: List[str] = []
    for r in result.date_ranges:
        for t in r.times or []:
            if t not in times:
                times.append(t)
    return ParsedEvent(
        title=result.title,
        dates=expand_date_ranges(result.date_ranges),
        times=times,
        description=result.description or "",
        raw=raw,
    )


class EventParser:
    """Local-first event parser with an optional language model fallback.

    The inference client is injected; pass None to run local-only.
    """

    def __init__(self, client: Optional[InferenceClient] = None, extractor: Optional[DateExtractor] = None):
        self.client = client
        self.extractor = extractor or DateExtractor()

    async def parse(self, text: str, *, now: Optional[datetime] = None) -> ParsedEvent:
        local_result = parse_event_description(text, now=now, extractor=self.extractor)
        confidence = local_confidence(local_result)

        if confidence >= LOCAL_CONFIDENCE_THRESHOLD:
            logger.debug(f"Local parse accepted with confidence {confidence}")
            return local_result

        if self.client is None:
            logger.debug(f"Local confidence {confidence} below threshold but no LLM client configured")
            return local_result

        try:
            reference_date = (now or datetime.now()).date()
            llm_result = await parse_event_with_llm(text, self.client, reference_date=reference_date)

            if llm_result is not None and llm_result.confidence >= LLM_CONFIDENCE_THRESHOLD:
                logger.debug(f"LLM parse accepted with confidence {llm_result.confidence}")
                return llm_result_to_parsed_event(llm_result, text)

            if llm_result is not None:
                logger.debug(
                    f"LLM confidence {llm_result.confidence} below threshold {LLM_CONFIDENCE_THRESHOLD}. Using local result."
                )
        except Exception as e:
            logger.warning(f"LLM parsing failed, using local result: {type(e).__name__}")

        return local_result

    async def parse_advanced(self, text: str, *, now: Optional[datetime] = None) -> Optional[LLMParsedEvent]:
        """Raw language model result with date ranges intact, for callers that need them."""
        if self.client is None:
            return None
        reference_date = (now or datetime.now()).date()
        return await parse_event_with_llm(text, self.client, reference_date=reference_date)


async def parse_event_description_smart(
    text: str,
    *,
    client: Optional[InferenceClient] = None,
    now: Optional[datetime] = None,
) -> ParsedEvent:
    """Parse an event description, escalating to the language model only when needed.

    When client is None a default OpenAIClient is built from the environment;
    without OPENAI_API_KEY it is simply unavailable and the local result wins.
    """
    return await EventParser(client or OpenAIClient()).parse(text, now=now)
