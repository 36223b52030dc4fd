"""Event parse result models for datepoll."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class ParsedEvent(BaseModel):
    """Result of parsing a free-form event description.

    Notes:
    - dates are calendar days, strictly ascending, with no duplicate day.
    - times are display strings ("7:00 PM") in the order they were found.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    dates: List[date] = Field(default_factory=list)
    times: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    raw: str


class DateRange(BaseModel):
    """Date range as returned by the language model.

    A range without days_of_week denotes a single occurrence on start.
    """

    model_config = ConfigDict(populate_by_name=True)

    start: date
    end: date
    days_of_week: Optional[List[int]] = Field(None, alias="daysOfWeek")
    times: Optional[List[str]] = None

    @field_validator("days_of_week")
    @classmethod
    def _validate_days_of_week(cls, v):
        if v is None:
            return None
        for day in v:
            if day < 0 or day > 6:
                raise ValueError("daysOfWeek entries must be between 0 and 6")
        return v

    @field_validator("end")
    @classmethod
    def _validate_end(cls, v, info):
        start = info.data.get("start")
        if start is not None and v < start:
            raise ValueError("end must be >= start")
        return v


class LLMParsedEvent(BaseModel):
    """Structured event returned by the fallback resolver."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    date_ranges: List[DateRange] = Field(..., alias="dateRanges", min_length=1)
    description: Optional[str] = None
    confidence: float = 0.0

    @field_validator("title")
    @classmethod
    def _validate_title(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("confidence")
    @classmethod
    def _validate_confidence(cls, v):
        if v < 0.0 or v > 1.0:
            logger.warning(f"Invalid confidence value {v} from model. Using 0.0.")
            return 0.0
        return v


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)
