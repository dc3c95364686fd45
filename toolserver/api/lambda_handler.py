"""Lambda Handler — API Gateway proxy events → JSON-RPC dispatcher.

Invariants:
    - Every response carries the CORS headers (preflight included)
    - OPTIONS → 200 empty body; any other non-POST method → 405
    - Notification-only bodies → 202 empty body
    - Unexpected failures → 500 with a JSON-RPC -32603 envelope (never a raw traceback)

Design Decisions:
    - Fresh dispatcher per invocation: each asyncio.run() owns its own event loop,
      and pooled httpx clients cannot cross loops
"""

import asyncio
import base64
import binascii
import json
import logging

from toolserver.config import get_settings
from toolserver.core.jsonrpc import INTERNAL_ERROR, error_response
from toolserver.infrastructure.observability import setup_logging
from toolserver.services.jsonrpc_dispatch import build_rpc_dispatcher

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def _response(status_code: int, body=None) -> dict:
    headers = {**CORS_HEADERS, "Content-Type": "application/json"}
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": "" if body is None else json.dumps(body, ensure_ascii=False),
    }


def _http_method(event: dict) -> str:
    # REST API (v1) events carry httpMethod; HTTP API (v2) events nest it
    method = event.get("httpMethod")
    if not method:
        method = event.get("requestContext", {}).get("http", {}).get("method", "")
    return method.upper()


def _decode_body(event: dict) -> str:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return body


async def _dispatch(body: str):
    dispatcher = build_rpc_dispatcher(get_settings())
    try:
        return await dispatcher.handle(body)
    finally:
        await dispatcher.aclose()


def handler(event: dict, context=None) -> dict:
    """AWS Lambda entry point."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    method = _http_method(event)
    if method == "OPTIONS":
        return _response(200)
    if method != "POST":
        return _response(405, {"error": "Method not allowed"})

    try:
        body = _decode_body(event)
        result = asyncio.run(_dispatch(body))
    except (binascii.Error, UnicodeDecodeError) as e:
        logger.warning(f"Undecodable request body: {e}", extra={"transport": "lambda"})
        return _response(500, error_response(None, INTERNAL_ERROR, "Internal error", str(e)))
    except Exception as e:
        logger.error(
            f"Lambda invocation failed: {e}",
            extra={"transport": "lambda"},
            exc_info=True,
        )
        return _response(500, error_response(None, INTERNAL_ERROR, "Internal error", str(e)))

    if result is None:
        return _response(202)
    return _response(200, result)
