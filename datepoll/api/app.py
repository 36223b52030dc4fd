"""FastAPI web application for datepoll."""

import logging
from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from datepoll.engine.smart_parser import EventParser
from datepoll.engine.validation import format_date_option, validate_parsed_event
from datepoll.integrations.openai_client import OpenAIClient
from datepoll.models.event import ParsedEvent, ValidationResult

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="datepoll API",
    description="Turns free-form event descriptions into candidate poll dates",
    version="0.1.0"
)


@lru_cache(maxsize=1)
def get_event_parser() -> EventParser:
    """Parser shared by all requests."""
    return EventParser(OpenAIClient())


# Request/response models
class ParseRequest(BaseModel):
    """Request for parsing an event description."""
    description: str = Field(..., description='e.g. "Q1 Hangout - Fridays in January at 7pm"')


class ParseResponse(BaseModel):
    """Parsed event plus advisory validation."""
    event: ParsedEvent
    validation: ValidationResult
    date_labels: List[str] = Field(default_factory=list, description="Display labels, one per date")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/events/parse", response_model=ParseResponse)
async def parse_event(request: ParseRequest, parser: EventParser = Depends(get_event_parser)):
    """Parse a natural language event description into date options."""
    if not request.description or not request.description.strip():
        raise HTTPException(status_code=400, detail="Description is required")

    event = await parser.parse(request.description)
    validation = validate_parsed_event(event)
    logger.info(
        f"Parsed event '{event.title}': {len(event.dates)} date(s), valid={validation.valid}"
    )
    return ParseResponse(
        event=event,
        validation=validation,
        date_labels=[format_date_option(d) for d in event.dates],
    )
