"""
Anthropic Messages API provider.

Sends the full conversation with a fixed model and generation parameters
and returns the first text block of the reply.
"""

from typing import Any, Optional

import httpx

from app.core.config import get_settings
from app.core.exceptions import CompletionDecodeError, UpstreamError
from app.core.logger import logger
from app.interfaces.completion_provider import ICompletionProvider


class AnthropicCompletionProvider(ICompletionProvider):
    """Completion provider backed by the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model_name: Optional[str] = None,
        api_url: Optional[str] = None,
        api_version: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Anthropic provider.

        Unset arguments fall back to settings. A ``timeout`` of None means
        the request may wait indefinitely.

        Args:
            api_key: Anthropic API key
            model_name: Model identifier (e.g., "claude-3-haiku-20240307")
            api_url: Messages endpoint URL
            api_version: Value of the anthropic-version header
            max_tokens: Output token bound
            temperature: Sampling temperature
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._settings = get_settings()
        self._api_key = api_key
        self._model_name = model_name or self._settings.COMPLETION_MODEL
        self._api_url = api_url or self._settings.ANTHROPIC_API_URL
        self._api_version = api_version or self._settings.ANTHROPIC_VERSION
        self._max_tokens = max_tokens if max_tokens is not None else self._settings.COMPLETION_MAX_TOKENS
        self._temperature = (
            temperature if temperature is not None else self._settings.COMPLETION_TEMPERATURE
        )
        self._timeout = timeout if timeout is not None else self._settings.COMPLETION_TIMEOUT_SECONDS
        self._transport = transport

    def get_model_name(self) -> str:
        """Get the model identifier sent upstream."""
        return self._model_name

    def build_payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Build the Messages API request body."""
        return {
            "model": self._model_name,
            "messages": messages,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": self._api_version,
        }

    @staticmethod
    def extract_text(data: Any) -> str:
        """
        Pull the reply text out of a Messages API response.

        Raises:
            CompletionDecodeError: If the payload has no text block
        """
        try:
            text = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise CompletionDecodeError("Malformed completion payload", raw_payload=data) from e
        if not isinstance(text, str):
            raise CompletionDecodeError("Completion text is not a string", raw_payload=data)
        return text

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Send the conversation and return the reply text."""
        payload = self.build_payload(messages)
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            ) as client:
                resp = await client.post(self._api_url, headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Error calling completion API: {e}")
            raise UpstreamError("Failed to get response from completion API") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            logger.error(f"Completion API returned {resp.status_code}: {resp.text[:500]}")
            raise UpstreamError(
                "Failed to get response from completion API",
                details={"status_code": resp.status_code},
            )

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"Completion API returned invalid JSON: {e}")
            raise CompletionDecodeError("Completion API returned invalid JSON") from e

        return self.extract_text(data)
