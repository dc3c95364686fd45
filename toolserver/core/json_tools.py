"""JSON Utilities — format, minify, validate and path-query JSON text.

Invariants:
    - validate_json never raises on invalid JSON (returns valid=False, with the
      position when the decoder reports one)
    - format/minify/query raise ToolValidationError on unparseable input
    - Pure functions: no IO
"""

import json
import re
from typing import Any

from toolserver.core.errors import ToolValidationError


MAX_INDENT: int = 8

# a.b[0].c → ("a", None) ("b", None) (None, "0") ("c", None)
_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[(-?\d+)\]")

_JSON_TYPES = {
    dict: "object", list: "array", str: "string",
    bool: "boolean", int: "number", float: "number", type(None): "null",
}


def _parse(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ToolValidationError(
            f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
            "json_string",
        )
    except (RecursionError, ValueError) as e:
        # nesting past the recursion limit or integers past the digit limit
        raise ToolValidationError(f"Invalid JSON: {e}", "json_string")


def format_json(text: str, indent: int = 2, sort_keys: bool = False) -> str:
    if not 0 <= indent <= MAX_INDENT:
        raise ToolValidationError(
            f"indent must be between 0 and {MAX_INDENT}", "indent",
        )
    return json.dumps(
        _parse(text), indent=indent, sort_keys=sort_keys, ensure_ascii=False,
    )


def minify_json(text: str) -> str:
    return json.dumps(_parse(text), separators=(",", ":"), ensure_ascii=False)


def validate_json(text: str) -> dict:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return {
            "valid": False,
            "error": e.msg,
            "line": e.lineno,
            "column": e.colno,
        }
    except (RecursionError, ValueError) as e:
        return {"valid": False, "error": str(e)}
    return {"valid": True, "type": _JSON_TYPES[type(data)]}


def _tokenize(path: str) -> list[str | int]:
    tokens: list[str | int] = []
    for key, index in _PATH_TOKEN.findall(path):
        tokens.append(int(index) if index else key)
    return tokens


def query_json(text: str, path: str) -> Any:
    """Look up a dot/bracket path like `a.b[0].c`. Empty path returns the root."""
    current = _parse(text)
    walked = "$"
    for token in _tokenize(path or ""):
        if isinstance(token, int):
            if not isinstance(current, list) or not -len(current) <= token < len(current):
                raise ToolValidationError(
                    f"Index [{token}] not found at {walked}", "path",
                )
            current = current[token]
            walked += f"[{token}]"
        else:
            if not isinstance(current, dict) or token not in current:
                raise ToolValidationError(
                    f"Key '{token}' not found at {walked}", "path",
                )
            current = current[token]
            walked += f".{token}"
    return current
