"""stdio → HTTP Proxy — lets stdio-only MCP clients reach a remote /mcp endpoint.

Invariants:
    - Same line framing as the stdio server (run_line_loop)
    - Messages forwarded verbatim; the remote answer is relayed verbatim
    - Remote/transport failures become JSON-RPC -32603 envelopes for the caller's id
    - Notifications never get a reply, even when forwarding fails

Design Decisions:
    - httpx.AsyncClient with one timeout for the whole call: the remote side
      owns retries against GitHub/GitLab
"""

import json
import logging
from typing import Any, TextIO

import httpx

from toolserver.config import Settings
from toolserver.core.jsonrpc import INTERNAL_ERROR, PARSE_ERROR, error_response
from toolserver.api.stdio_server import run_line_loop

logger = logging.getLogger(__name__)


def _describe_failure(exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}"
    return str(exc) or type(exc).__name__


def failure_message(message: dict, exc: Exception) -> str:
    """Caller-facing text for a failed forward, keyed on the JSON-RPC method."""
    reason = _describe_failure(exc)
    method = message.get("method")
    if method == "tools/call":
        params = message.get("params")
        name = params.get("name") if isinstance(params, dict) else None
        return f"Failed to call tool {name}: {reason}"
    if method == "tools/list":
        return f"Failed to list tools: {reason}"
    return f"Failed to forward {method}: {reason}"


class StdioProxy:
    """Forwards newline-delimited JSON-RPC to an HTTP endpoint."""

    def __init__(
        self,
        target_url: str,
        timeout_seconds: float = 60.0,
        user_agent: str = "mcp-dev-tools-proxy/1.0.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.target_url = target_url
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"Content-Type": "application/json", "User-Agent": user_agent},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, target_url: str | None = None):
        return cls(
            target_url or settings.proxy_target_url,
            timeout_seconds=settings.proxy_timeout_seconds,
            user_agent=f"{settings.server_name}-proxy/{settings.server_version}",
        )

    async def handle_line(self, line: str) -> Any:
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Proxy parse error: {e}", extra={"transport": "proxy"})
            return error_response(None, PARSE_ERROR, "Parse error")

        try:
            return await self._forward(message)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                f"Proxy forward failed: {_describe_failure(e)}",
                extra={"transport": "proxy"},
            )
            return self._failure(message, e)

    async def _forward(self, message: Any) -> Any:
        response = await self._client.post(self.target_url, json=message)
        response.raise_for_status()
        if response.status_code == 202 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _failure(message: Any, exc: Exception) -> Any:
        if isinstance(message, list):
            failures = [
                error_response(m.get("id"), INTERNAL_ERROR, failure_message(m, exc))
                for m in message
                if isinstance(m, dict) and "id" in m
            ]
            return failures or None
        if not isinstance(message, dict):
            return error_response(None, INTERNAL_ERROR, _describe_failure(exc))
        if "id" not in message:
            return None
        return error_response(message["id"], INTERNAL_ERROR, failure_message(message, exc))

    async def run(self, reader: TextIO, writer: TextIO) -> int:
        logger.info(
            f"stdio proxy forwarding to {self.target_url}",
            extra={"transport": "proxy"},
        )
        try:
            return await run_line_loop(self.handle_line, reader, writer)
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()
