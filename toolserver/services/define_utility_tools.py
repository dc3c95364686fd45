"""Utility Tool Schemas — MCP Tool format for calculator, JSON, regex and color tools.

Invariants:
    - Every utility tool is pure: same arguments, same output (get_time lives in basic)
    - Enum values mirror core/domain_types.py (PaletteType, MathOperation)

Design Decisions:
    - Enums built from the domain Enums, not retyped: schema and core can't drift
"""

from toolserver.core.color_palette import DEFAULT_COLORS, MAX_COLORS, MIN_COLORS
from toolserver.core.domain_types import MathOperation, PaletteType


TOOLS_UTILITY = [
    {
        "name": "calculate",
        "description": (
            "Evaluates an arithmetic expression with numbers, + - * / "
            "and parentheses. Example: (2 + 3) * 4 / 2"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "expression": {
                    "type": "string",
                    "description": "Arithmetic expression to evaluate",
                },
            },
            "required": ["expression"],
        },
    },
    {
        "name": "math_operation",
        "description": (
            "Applies a named math operation. Angles for sin/cos/tan are in degrees. "
            "percentage, power, rectangle_area and triangle_area need `b`."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "operation": {
                    "type": "string",
                    "enum": [op.value for op in MathOperation],
                },
                "a": {
                    "type": "number",
                    "description": "First operand (value, base, radius, width or angle)",
                },
                "b": {
                    "type": "number",
                    "description": "Second operand (percentage, exponent or height)",
                },
            },
            "required": ["operation", "a"],
        },
    },
    {
        "name": "json_format",
        "description": "Pretty-prints or minifies a JSON document.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "json_string": {"type": "string"},
                "indent": {"type": "integer", "default": 2},
                "sort_keys": {"type": "boolean", "default": False},
                "minify": {"type": "boolean", "default": False},
            },
            "required": ["json_string"],
        },
    },
    {
        "name": "json_validate",
        "description": (
            "Checks whether a string is valid JSON. Reports line and column "
            "of the first error."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "json_string": {"type": "string"},
            },
            "required": ["json_string"],
        },
    },
    {
        "name": "json_query",
        "description": (
            "Extracts a value from a JSON document with a dot/bracket path, "
            "e.g. items[0].name"
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "json_string": {"type": "string"},
                "path": {"type": "string"},
            },
            "required": ["json_string", "path"],
        },
    },
    {
        "name": "regex_test",
        "description": "Finds all matches of a regular expression in a text.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "pattern": {"type": "string"},
                "text": {"type": "string"},
                "flags": {
                    "type": "string",
                    "description": "Any of i (ignore case), m (multiline), s (dotall), x (verbose)",
                },
            },
            "required": ["pattern", "text"],
        },
    },
    {
        "name": "regex_replace",
        "description": (
            "Replaces regex matches in a text. Replacement may use \\1 or "
            "\\g<name> back-references."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "pattern": {"type": "string"},
                "replacement": {"type": "string"},
                "text": {"type": "string"},
                "flags": {"type": "string"},
                "count": {
                    "type": "integer",
                    "description": "Maximum replacements, 0 = all",
                    "default": 0,
                },
            },
            "required": ["pattern", "replacement", "text"],
        },
    },
    {
        "name": "generate_color_palette",
        "description": (
            "Generates a color palette from a base hex color using a color "
            "harmony. Returns hex, rgb and hsl for each color."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "base_color": {
                    "type": "string",
                    "description": "Base color as #RRGGBB or #RGB",
                },
                "palette_type": {
                    "type": "string",
                    "enum": [p.value for p in PaletteType],
                    "default": PaletteType.COMPLEMENTARY.value,
                },
                "count": {
                    "type": "integer",
                    "description": (
                        f"Colors for monochromatic/analogous "
                        f"({MIN_COLORS}-{MAX_COLORS})"
                    ),
                    "default": DEFAULT_COLORS,
                },
            },
            "required": ["base_color"],
        },
    },
]
