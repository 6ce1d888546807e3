"""Async HTTP client for the Gemini generateContent endpoint."""

import logging
from typing import Any, Protocol

import httpx

from aithena.agent.config import AssistantConfig
from aithena.agent.errors import MalformedResponse, NetworkFailure

logger = logging.getLogger(__name__)


class GenerativeClient(Protocol):
    """What the session engine needs from the network layer."""

    async def generate_content(self, payload: dict[str, Any]) -> Any: ...


class GeminiClient:
    """Sends one generateContent request per call.

    A fresh httpx.AsyncClient is opened per request, so the client holds
    no connections between submissions.
    """

    def __init__(
        self,
        config: AssistantConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Assistant configuration (key, model, base URL, timeout).
            transport: Optional httpx transport, used by tests.
        """
        self._config = config
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/models/{self._config.model_name}:generateContent"

    async def generate_content(self, payload: dict[str, Any]) -> Any:
        """POST the payload and return the decoded JSON body.

        Args:
            payload: JSON-ready generateContent request body.

        Returns:
            Decoded response body.

        Raises:
            NetworkFailure: On transport errors or a non-success status.
            MalformedResponse: If the body is not valid JSON.
        """
        async with httpx.AsyncClient(
            timeout=self._config.request_timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(
                    self.endpoint,
                    json=payload,
                    headers={"x-goog-api-key": self._config.api_key},
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.warning(f"Gemini returned HTTP {status_code}: {e.response.text[:200]}")
                raise NetworkFailure(f"HTTP {status_code}", status_code=status_code) from e
            except httpx.RequestError as e:
                raise NetworkFailure(f"Connection failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"Response body is not JSON: {e}") from e
