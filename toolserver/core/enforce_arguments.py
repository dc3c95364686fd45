"""Argument Enforcement — validates tools/call arguments against a tool's inputSchema.

Invariants:
    - validate_arguments is PURE: returns an error message or None, never raises
    - Required keys must be present and non-null
    - Only the JSON Schema subset used by the catalog is checked
      (type, required, enum, array items type)

Design Decisions:
    - Subset validator over a jsonschema dependency: the catalog schemas are flat
      objects, one level deep (ADR: no dependency for ~40 lines of checks)
    - First failure wins: tool callers fix one argument at a time
"""

from typing import Any


_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "array": lambda v: isinstance(v, list),
    "object": lambda v: isinstance(v, dict),
}


def _check_value(name: str, prop: dict, value: Any) -> str | None:
    expected = prop.get("type")
    check = _TYPE_CHECKS.get(expected)
    if check and not check(value):
        return f'Parameter "{name}" must be of type {expected}'

    enum = prop.get("enum")
    if enum is not None and value not in enum:
        allowed = ", ".join(str(e) for e in enum)
        return f'Parameter "{name}" must be one of: {allowed}'

    if expected == "array":
        item_type = (prop.get("items") or {}).get("type")
        item_check = _TYPE_CHECKS.get(item_type)
        if item_check and not all(item_check(v) for v in value):
            return f'Parameter "{name}" must be an array of {item_type}'
    return None


def validate_arguments(
    tool_name: str, schema: dict, arguments: Any,
) -> str | None:
    """Return the first validation failure for arguments, or None."""
    if not isinstance(arguments, dict):
        return f"Arguments for {tool_name} must be an object"

    missing = [
        key for key in schema.get("required", [])
        if arguments.get(key) is None
    ]
    if len(missing) == 1:
        return f'Parameter "{missing[0]}" is required for {tool_name}'
    if missing:
        names = ", ".join(f'"{m}"' for m in missing)
        return f"Parameters {names} are required for {tool_name}"

    properties = schema.get("properties", {})
    for name, value in arguments.items():
        prop = properties.get(name)
        if prop is None or value is None:
            continue
        error = _check_value(name, prop, value)
        if error:
            return error
    return None
