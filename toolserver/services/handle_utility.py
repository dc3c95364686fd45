"""Utility Handlers — calculator, JSON, regex and color palette tools (8 methods).

Invariants:
    - Every method delegates to a pure core/ function; no IO here
    - Regex scans run in a worker thread so a slow pattern never blocks the loop
    - Domain errors (CalculationError, ToolValidationError) propagate to dispatch
"""

import asyncio

from toolserver.core import calculator, color_palette, json_tools, regex_tools
from toolserver.core.jsonrpc import labeled_text


class UtilityHandlers:
    """Stateless utility tools."""

    async def calculate(self, args: dict) -> str:
        expression = args["expression"]
        result = calculator.calculate(expression)
        return f"Result: {expression} = {result}"

    async def math_operation(self, args: dict) -> str:
        operation = args["operation"]
        result = calculator.apply_operation(operation, args["a"], args.get("b"))
        return f"Result of {operation}: {result}"

    async def json_format(self, args: dict) -> str:
        text = args["json_string"]
        if args.get("minify"):
            return json_tools.minify_json(text)
        return json_tools.format_json(
            text,
            indent=2 if args.get("indent") is None else args["indent"],
            sort_keys=bool(args.get("sort_keys", False)),
        )

    async def json_validate(self, args: dict) -> str:
        return labeled_text(
            "JSON validation", json_tools.validate_json(args["json_string"]),
        )

    async def json_query(self, args: dict) -> str:
        value = json_tools.query_json(args["json_string"], args["path"])
        return labeled_text(f"Value at {args['path']}", value)

    async def regex_test(self, args: dict) -> str:
        result = await asyncio.to_thread(
            regex_tools.match_regex,
            args["pattern"], args["text"], args.get("flags") or "",
        )
        return labeled_text("Regex matches", result)

    async def regex_replace(self, args: dict) -> str:
        result = await asyncio.to_thread(
            regex_tools.replace_regex,
            args["pattern"],
            args["replacement"],
            args["text"],
            flags=args.get("flags") or "",
            count=args.get("count") or 0,
        )
        return labeled_text("Regex replacement", result)

    async def generate_color_palette(self, args: dict) -> str:
        palette = color_palette.generate_palette(
            args["base_color"],
            palette_type=args.get("palette_type") or "complementary",
            count=(
                color_palette.DEFAULT_COLORS if args.get("count") is None
                else args["count"]
            ),
        )
        return labeled_text("Color palette", palette)
