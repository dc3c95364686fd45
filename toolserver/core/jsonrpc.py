"""JSON-RPC Envelopes — pure builders for responses, errors and tool results.

Invariants:
    - Every response carries jsonrpc="2.0" and echoes the request id verbatim
    - Exactly one of result/error is present
    - Tool results follow the MCP CallToolResult shape: content[] + optional isError

Design Decisions:
    - Standard JSON-RPC 2.0 codes as module constants: single source of truth
      shared by HTTP, Lambda and stdio transports
"""

import json
from typing import Any


JSONRPC_VERSION = "2.0"
DEFAULT_PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def success_response(request_id: Any, result: Any) -> dict:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(
    request_id: Any, code: int, message: str, data: Any = None,
) -> dict:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}


def text_result(text: str, is_error: bool = False) -> dict:
    """CallToolResult with a single text block."""
    result: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


def labeled_text(label: str, data: Any) -> str:
    """`Label:\\n{pretty json}` — the text format for structured tool output."""
    return f"{label}:\n{json.dumps(data, indent=2, ensure_ascii=False, default=str)}"
