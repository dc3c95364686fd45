"""Resilient REST Client — tests for retry, backoff and error mapping.

Tests cover:
    - 5xx and connection errors retried up to max_retries
    - 429 retried, then reported with Retry-After
    - 4xx (except 429) and timeouts fail immediately
    - Body decoding: JSON, text, empty
    - Raised errors carry provider, method and path in their context
"""

import httpx
import pytest

from toolserver.core.errors import ExternalAPIError
from toolserver.infrastructure.rest_client import ResilientRestClient


def _client(handler, max_retries=2):
    return ResilientRestClient(
        "https://api.example.test",
        headers={"X-Test": "1"},
        max_retries=max_retries,
        base_delay_ms=0,
        transport=httpx.MockTransport(handler),
    )


def _sequence(*steps):
    """Handler answering with each step in turn (last one repeats); records calls.

    A step is an exception to raise or a (status, kwargs) pair for httpx.Response.
    """
    calls = []

    def handler(request):
        calls.append(request)
        step = steps[min(len(calls), len(steps)) - 1]
        if isinstance(step, Exception):
            raise step
        status, kwargs = step
        return httpx.Response(status, **kwargs)

    return handler, calls


@pytest.mark.asyncio
async def test_success_returns_json():
    handler, calls = _sequence((200, {"json": {"ok": True}}))
    async with _client(handler) as client:
        assert await client.get("/thing") == {"ok": True}
    assert calls[0].headers["X-Test"] == "1"


@pytest.mark.asyncio
async def test_server_error_retried_then_succeeds():
    handler, calls = _sequence(
        (502, {"json": {"message": "bad gateway"}}),
        (200, {"json": [1]}),
    )
    async with _client(handler) as client:
        assert await client.get("/thing") == [1]
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_server_error_exhausts_retries():
    handler, calls = _sequence((503, {"json": {"message": "down"}}))
    async with _client(handler, max_retries=2) as client:
        with pytest.raises(ExternalAPIError) as exc:
            await client.get("/thing")
    assert len(calls) == 3
    assert exc.value.status_code == 503
    assert exc.value.message == "REST API error (HTTP 503): down"


@pytest.mark.asyncio
async def test_connection_error_exhausts_retries():
    handler, calls = _sequence(httpx.ConnectError("refused"))
    async with _client(handler, max_retries=1) as client:
        with pytest.raises(ExternalAPIError, match="Transient failure after 1 retries"):
            await client.get("/thing")
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_rate_limit_retried_then_reported():
    handler, calls = _sequence(
        (429, {"headers": {"Retry-After": "0"}, "json": {"message": "slow down"}}),
    )
    async with _client(handler, max_retries=1) as client:
        with pytest.raises(ExternalAPIError, match="Rate limit exceeded after retries") as exc:
            await client.get("/thing")
    assert len(calls) == 2
    assert exc.value.status_code == 429


@pytest.mark.asyncio
async def test_rate_limit_then_success():
    handler, calls = _sequence(
        (429, {}),
        (200, {"json": {"ok": 1}}),
    )
    async with _client(handler) as client:
        assert await client.get("/thing") == {"ok": 1}


@pytest.mark.asyncio
async def test_client_error_not_retried():
    handler, calls = _sequence((422, {"json": {"message": "Validation Failed"}}))
    async with _client(handler) as client:
        with pytest.raises(ExternalAPIError) as exc:
            await client.post("/issues", {"title": ""})
    assert len(calls) == 1
    assert exc.value.message == "REST API error (HTTP 422): Validation Failed"
    assert exc.value.http_status == 502


@pytest.mark.asyncio
async def test_timeout_not_retried():
    handler, calls = _sequence(httpx.ReadTimeout("slow"))
    async with _client(handler) as client:
        with pytest.raises(ExternalAPIError, match="GET /thing timed out"):
            await client.get("/thing")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_error_message_falls_back_to_text():
    handler, _ = _sequence((404, {"text": "no such page"}))
    async with _client(handler) as client:
        with pytest.raises(ExternalAPIError, match="no such page"):
            await client.get("/missing")


@pytest.mark.asyncio
async def test_error_message_uses_error_field():
    handler, _ = _sequence((401, {"json": {"error": "invalid_token"}}))
    async with _client(handler) as client:
        with pytest.raises(ExternalAPIError, match="invalid_token"):
            await client.get("/user")


@pytest.mark.asyncio
async def test_empty_body_decodes_to_none():
    handler, _ = _sequence((204, {}))
    async with _client(handler) as client:
        assert await client.get("/empty") is None


@pytest.mark.asyncio
async def test_non_json_body_decodes_to_text():
    handler, _ = _sequence((200, {"text": "plain"}))
    async with _client(handler) as client:
        assert await client.get("/text") == "plain"

@pytest.mark.asyncio
async def test_client_error_context_names_request():
    handler, _ = _sequence((422, {"json": {"message": "Validation Failed"}}))
    async with _client(handler) as client:
        with pytest.raises(ExternalAPIError) as exc:
            await client.post("/issues", {"title": ""})
    assert exc.value.context.provider == "REST"
    assert exc.value.context.debug_info == {"method": "POST", "path": "/issues"}


@pytest.mark.asyncio
async def test_rate_limit_context_keeps_retry_after():
    handler, _ = _sequence((429, {"headers": {"Retry-After": "2"}}))
    async with _client(handler, max_retries=0) as client:
        with pytest.raises(ExternalAPIError) as exc:
            await client.get("/thing")
    assert exc.value.context.retry_after_ms == 2000
    assert exc.value.context.debug_info == {"method": "GET", "path": "/thing"}



def test_backoff_is_capped_with_jitter():
    client = ResilientRestClient(
        "https://api.example.test", headers={}, base_delay_ms=1000, max_delay_ms=4000,
    )
    for attempt in range(6):
        delay = client._backoff(attempt)
        assert 0 < delay <= 5000
    assert client._backoff(10) >= 3000


def test_retry_after_seconds_to_ms():
    response = httpx.Response(429, headers={"Retry-After": "3"})
    assert ResilientRestClient._extract_retry_after(response) == 3000
    assert ResilientRestClient._extract_retry_after(httpx.Response(429)) is None
