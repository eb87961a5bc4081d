from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx
from loguru import logger

from ..exceptions import ConfigurationError, ProviderError
from ..shard import constants as C


def _missing_key_error() -> ConfigurationError:
    return ConfigurationError(f"GEMINI_API_KEY environment variable is required. Get your API key from {C.API_KEY_URL}")


def extract_error_message(body: str) -> str:
    """Return ``error.message`` from a Gemini error body, or the raw body text."""
    try:
        payload = json.loads(body)
    except ValueError:
        return body
    if isinstance(payload, Mapping):
        error = payload.get("error")
        if isinstance(error, Mapping) and error.get("message"):
            return str(error["message"])
    return body


class GeminiTransport:
    """Single-attempt HTTP transport for ``models/{model}:generateContent``.

    The API key is injected at construction; no retries, caching or circuit
    breaking happen here. ``transport`` lets tests plug in an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = C.DEFAULT_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise _missing_key_error()
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/{model}:{C.GENERATE_CONTENT_METHOD}"

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", C.API_KEY_HEADER: self._api_key}

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"transport": self._transport}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return httpx.AsyncClient(**kwargs)

    async def post_generate_content(self, model: str, envelope: Mapping[str, Any]) -> dict[str, Any]:
        """POST the envelope and return the parsed JSON body unmodified.

        Raises:
            ProviderError: On a non-2xx status or a network failure.
        """
        url = self.endpoint(model)
        logger.debug(f"POST {url}")
        try:
            async with self._client() as client:
                response = await client.post(url, json=dict(envelope), headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(f"Gemini request to {model} failed: {e}")
            raise ProviderError(f"Gemini API request failed: {e}") from e

        if not response.is_success:
            message = extract_error_message(response.text)
            logger.warning(f"Gemini API returned {response.status_code} for {model}")
            raise ProviderError(f"Gemini API error ({response.status_code}): {message}", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"Gemini API returned a non-JSON body ({response.status_code}): {response.text}", status_code=response.status_code) from e


__all__ = ["GeminiTransport", "extract_error_message"]
