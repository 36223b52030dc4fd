"""OpenAI API integration for datepoll.

This module provides the inference capability used by the fallback tier of the
event parser. The parser only depends on InferenceClient.complete(); OpenAIClient
is the production implementation.
"""

import os
import logging
from abc import ABC, abstractmethod
from typing import Optional
from openai import AsyncOpenAI, APIError
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# gpt-4o-mini is cheap and more than capable of date extraction
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_MAX_TOKENS = int(os.getenv("OPENAI_MAX_TOKENS", "1024"))
OPENAI_TIMEOUT_SEC = float(os.getenv("OPENAI_TIMEOUT_SEC", "30"))


class InferenceClient(ABC):
    """Abstract text-completion capability."""

    @property
    def available(self) -> bool:
        return True

    @abstractmethod
    async def complete(self, system_prompt: str, user_message: str) -> Optional[str]:
        """Send one system + user exchange to the model.

        Returns:
            Raw response text, or None if the capability is unavailable or the call failed.
        """


class OpenAIClient(InferenceClient):
    """Client for OpenAI API integration."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model: str = OPENAI_MODEL,
        max_tokens: int = OPENAI_MAX_TOKENS,
        timeout: float = OPENAI_TIMEOUT_SEC,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key. If None, reads from OPENAI_API_KEY environment variable.
            model: Model identifier (default from OPENAI_MODEL).
            max_tokens: Maximum output tokens per request.
            timeout: Request timeout in seconds, enforced by the SDK.

        Note:
            If API key is not provided and not found in environment, the client will still
            initialize but report itself unavailable. This allows graceful degradation.
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model
        self.max_tokens = max_tokens
        self.client = None

        if self.api_key:
            self.client = AsyncOpenAI(api_key=self.api_key, timeout=timeout)
        else:
            logger.warning("OPENAI_API_KEY not found in environment. LLM date parsing will not be available.")

    @property
    def available(self) -> bool:
        return self.client is not None

    async def complete(self, system_prompt: str, user_message: str) -> Optional[str]:
        """Request a JSON completion for the given prompt.

        Returns None if:
        - API key is not configured
        - API call fails
        - Response is empty
        """
        if not self.client:
            logger.debug("OpenAI client not initialized. Skipping completion.")
            return None

        try:
            # System prompt goes first so the identical prefix is served from OpenAI's prompt cache
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=0.0,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
            )

            content = response.choices[0].message.content
            if not content or not content.strip():
                logger.warning("OpenAI returned an empty response")
                return None
            return content.strip()

        except APIError as e:
            # Handle OpenAI API errors (rate limits, quota issues, invalid key, etc.)
            error_code = getattr(e, 'code', None)
            status_code = getattr(e, 'status_code', None)

            if error_code == 'insufficient_quota':
                logger.warning("OpenAI API quota insufficient. Please check billing/payment method in OpenAI dashboard.")
            elif status_code == 429:
                logger.warning("OpenAI API rate limit exceeded. Please wait before retrying.")
            else:
                logger.error(f"OpenAI API error: {status_code or 'unknown'} ({error_code or 'unknown'})")

            # Don't log full error message as it might contain sensitive info
            return None
        except Exception as e:
            # Handle any other errors (network, timeout, etc.)
            logger.error(f"Error calling OpenAI API: {type(e).__name__}")
            return None
