"""Anthropic Claude client for narration script generation."""

import logging
import time
from typing import Optional, Protocol

from anthropic import Anthropic, APIConnectionError, APIError, RateLimitError

from ..config import config

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that turns a prompt into freeform text."""

    @property
    def model(self) -> str: ...

    def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: Optional[str] = None,
        temperature: float = 0.7,
    ) -> str: ...


class AnthropicClient:
    """Claude wrapper with retries on rate limits and dropped connections."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 120.0,
    ) -> None:
        """Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY env var.
            model: Model to use. Defaults to config.default_model.
            max_retries: Attempts per request before giving up.
            retry_delay: Base delay between retries in seconds (exponential backoff).
            timeout: Per-request timeout in seconds.
        """
        self._api_key = api_key or config.anthropic_api_key
        if not self._api_key:
            raise ValueError(
                "Anthropic API key not provided. Set ANTHROPIC_API_KEY env var."
            )

        self._client = Anthropic(api_key=self._api_key, timeout=timeout, max_retries=0)
        self._model = model or config.default_model
        self._max_retries = max(1, max_retries)
        self._retry_delay = retry_delay

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: Optional[str] = None,
        temperature: float = 0.7,
    ) -> str:
        """Send a single-turn prompt and return the text of the reply.

        Raises:
            APIError: If the request fails, or keeps failing after all retries.
        """
        kwargs = {
            "model": self._model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        if system:
            kwargs["system"] = system

        for attempt in range(1, self._max_retries + 1):
            logger.debug(f"Sending request to Claude (attempt {attempt}/{self._max_retries})")
            try:
                response = self._client.messages.create(**kwargs)
            except (RateLimitError, APIConnectionError) as e:
                if attempt == self._max_retries:
                    logger.error(f"Giving up after {attempt} attempts: {e}")
                    raise
                delay = self._retry_delay * (2 ** (attempt - 1))
                logger.warning(f"{type(e).__name__}: {e}. Retrying in {delay:.1f}s...")
                time.sleep(delay)
                continue
            except APIError as e:
                logger.error(f"API error: {e}")
                raise

            text = "".join(
                block.text for block in response.content if getattr(block, "type", None) == "text"
            )
            logger.debug(f"Received {len(text)} characters (stop_reason={response.stop_reason})")
            return text

