from __future__ import annotations

import json

import httpx
import pytest

from nanobanana_mcp.engines.transport import GeminiTransport, extract_error_message
from nanobanana_mcp.exceptions import ConfigurationError, ProviderError


def _recording_transport(response: httpx.Response, seen: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response

    return httpx.MockTransport(handler)


@pytest.mark.parametrize("key", [None, ""])
def test_missing_key_fails_before_any_request(key):
    with pytest.raises(ConfigurationError) as exc_info:
        GeminiTransport(key)

    assert "GEMINI_API_KEY" in str(exc_info.value)


def test_endpoint_url():
    transport = GeminiTransport("k", base_url="https://example.test/v1beta/models/")

    assert transport.endpoint("gemini-3-pro-image-preview") == "https://example.test/v1beta/models/gemini-3-pro-image-preview:generateContent"


@pytest.mark.asyncio
async def test_success_posts_envelope_and_returns_body():
    seen: list[httpx.Request] = []
    body = {"candidates": [{"content": {"parts": [{"text": "hi"}]}}]}
    transport = GeminiTransport("secret-key", transport=_recording_transport(httpx.Response(200, json=body), seen))
    envelope = {"contents": [{"parts": [{"text": "p"}]}]}

    result = await transport.post_generate_content("gemini-2.5-flash-image", envelope)

    assert result == body
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash-image:generateContent"
    assert request.headers["x-goog-api-key"] == "secret-key"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == envelope


@pytest.mark.asyncio
async def test_structured_error_message_is_surfaced():
    seen: list[httpx.Request] = []
    error_body = {"error": {"code": 400, "message": "API key not valid. Please pass a valid API key.", "status": "INVALID_ARGUMENT"}}
    transport = GeminiTransport("bad", transport=_recording_transport(httpx.Response(400, json=error_body), seen))

    with pytest.raises(ProviderError) as exc_info:
        await transport.post_generate_content("gemini-3-pro-image-preview", {})

    assert str(exc_info.value) == "Gemini API error (400): API key not valid. Please pass a valid API key."
    assert exc_info.value.status_code == 400
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_raw_body_surfaced_when_not_json():
    seen: list[httpx.Request] = []
    transport = GeminiTransport("k", transport=_recording_transport(httpx.Response(503, text="upstream unavailable"), seen))

    with pytest.raises(ProviderError) as exc_info:
        await transport.post_generate_content("gemini-3-pro-image-preview", {})

    assert str(exc_info.value) == "Gemini API error (503): upstream unavailable"
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_no_retry_on_failure():
    seen: list[httpx.Request] = []
    transport = GeminiTransport("k", transport=_recording_transport(httpx.Response(429, json={"error": {"message": "quota"}}), seen))

    with pytest.raises(ProviderError):
        await transport.post_generate_content("gemini-3-pro-image-preview", {})

    assert len(seen) == 1


@pytest.mark.asyncio
async def test_network_error_becomes_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = GeminiTransport("k", transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderError) as exc_info:
        await transport.post_generate_content("gemini-3-pro-image-preview", {})

    assert "connection refused" in str(exc_info.value)
    assert exc_info.value.status_code is None


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ('{"error": {"code": 403, "message": "denied", "status": "PERMISSION_DENIED"}}', "denied"),
        ('{"error": {"code": 500}}', '{"error": {"code": 500}}'),
        ("[1, 2]", "[1, 2]"),
        ("<html>bad gateway</html>", "<html>bad gateway</html>"),
        ("", ""),
    ],
)
def test_extract_error_message(body, expected):
    assert extract_error_message(body) == expected
