"""Pytest fixtures and configuration for datepoll tests."""

import json
from datetime import datetime
from typing import List, Optional, Tuple

import pytest

from datepoll.integrations.date_extractor import DateExtractor
from datepoll.integrations.openai_client import InferenceClient


class FakeInferenceClient(InferenceClient):
    """In-memory InferenceClient that returns a canned response and records calls."""

    def __init__(self, response: Optional[str] = None, *, error: Optional[Exception] = None, available: bool = True):
        self.response = response
        self.error = error
        self._available = available
        self.calls: List[Tuple[str, str]] = []

    @property
    def available(self) -> bool:
        return self._available

    async def complete(self, system_prompt: str, user_message: str) -> Optional[str]:
        self.calls.append((system_prompt, user_message))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def now():
    """Fixed reference moment: Wednesday, January 15, 2025 at noon."""
    return datetime(2025, 1, 15, 12, 0)


@pytest.fixture
def extractor():
    return DateExtractor()


@pytest.fixture
def llm_payload():
    """A well-formed fallback response body."""
    return {
        "title": "Q1 Hangout",
        "dateRanges": [
            {"start": "2025-01-01", "end": "2025-01-31", "daysOfWeek": [5, 6], "times": ["7:00 PM"]},
        ],
        "confidence": 0.92,
    }


@pytest.fixture
def fake_client(llm_payload):
    """Client that answers with llm_payload serialized as JSON."""
    return FakeInferenceClient(json.dumps(llm_payload))


@pytest.fixture
def raising_client():
    return FakeInferenceClient(error=RuntimeError("network down"))


@pytest.fixture
def unavailable_client():
    return FakeInferenceClient(available=False)
