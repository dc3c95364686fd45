"""Resilient REST Client — wraps httpx.AsyncClient with retry, backoff, and error mapping.

Invariants:
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection): max_retries retries with exponential backoff
    - Client errors (4xx except 429): immediate failure, no retry
    - Timeouts: immediate failure (the request may have been applied remotely)
    - All failures mapped to ExternalAPIError (core/errors.py)
    - Every raised ExternalAPIError carries {method, path} in context.debug_info

Design Decisions:
    - One base class for GitHub and GitLab: both are JSON-over-HTTPS with the same
      failure modes, only auth headers and endpoints differ (ADR: single responsibility)
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
    - transport injectable: tests pass httpx.MockTransport, no network
"""

import asyncio
import random
import logging
from typing import Any

import httpx

from toolserver.core.errors import ExternalAPIError

logger = logging.getLogger(__name__)

_MAX_ERROR_BODY = 200


class ResilientRestClient:
    """Async JSON REST client with retry logic, timeouts, and error mapping."""

    provider = "REST"

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str],
        timeout_seconds: float = 30.0,
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10_000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get(self, path: str, params: dict | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, payload: dict) -> Any:
        return await self.request("POST", path, json=payload)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
    ) -> Any:
        """Send request with automatic retry on transient failures."""
        try:
            return await self._send(method, path, params=params, json=json)
        except ExternalAPIError as e:
            e.context.debug_info = {"method": method, "path": path}
            raise

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict | None,
        json: dict | None,
    ) -> Any:
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(
                    method, path, params=params, json=json,
                )
            except httpx.TimeoutException:
                raise ExternalAPIError(self.provider, f"{method} {path} timed out")
            except httpx.TransportError as e:
                await self._handle_transient_error(e, attempt)
                continue

            if response.status_code == 429:
                await self._handle_rate_limit(response, attempt)
                continue
            if response.status_code >= 500:
                await self._handle_transient_error(
                    ExternalAPIError(
                        self.provider, self._error_message(response),
                        response.status_code,
                    ),
                    attempt,
                )
                continue
            if response.status_code >= 400:
                raise ExternalAPIError(
                    self.provider,
                    self._error_message(response),
                    response.status_code,
                )

            self._log_success(method, path, response, attempt)
            return self._decode(response)

    def _log_success(
        self, method: str, path: str, response: httpx.Response, attempt: int,
    ) -> None:
        logger.info(
            f"{self.provider} {method} {path}",
            extra={
                "provider": self.provider,
                "status_code": response.status_code,
                "attempt": attempt + 1,
            },
        )

    async def _handle_rate_limit(
        self, response: httpx.Response, attempt: int,
    ) -> None:
        """Handle rate limit response with retry or raise."""
        retry_after_ms = self._extract_retry_after(response)
        if attempt >= self.max_retries:
            raise ExternalAPIError(
                self.provider,
                "Rate limit exceeded after retries",
                response.status_code,
                retry_after_ms=retry_after_ms,
            )
        delay = retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"{self.provider} rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
            extra={"provider": self.provider, "attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(self, e: Exception, attempt: int) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            if isinstance(e, ExternalAPIError):
                raise e
            raise ExternalAPIError(
                self.provider,
                f"Transient failure after {self.max_retries} retries: {e}",
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"{self.provider} transient error, retry after {delay}ms: {e}",
            extra={"provider": self.provider, "attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    @staticmethod
    def _extract_retry_after(response: httpx.Response) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        val = response.headers.get("retry-after")
        if val and val.isdigit():
            return int(val) * 1000
        return None

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:_MAX_ERROR_BODY] or response.reason_phrase
        if isinstance(body, dict):
            message = body.get("message") or body.get("error")
            if message:
                return str(message)
        return str(body)[:_MAX_ERROR_BODY]

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
