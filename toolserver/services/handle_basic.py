"""Basic Handlers — echo and clock (2 methods).

Invariants:
    - Handlers return the text block of the tool result; dispatch wraps it
    - get_time is UTC unless a valid IANA timezone is given
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from toolserver.core.errors import ToolValidationError


class BasicHandlers:
    """Tools with no dependencies: echo, get_time."""

    async def echo(self, args: dict) -> str:
        return f"Echo: {args['message']}"

    async def get_time(self, args: dict) -> str:
        tz_name = args.get("timezone")
        if not tz_name:
            return f"Current time: {datetime.now(timezone.utc).isoformat()}"
        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ToolValidationError(f"Unknown timezone: {tz_name}", "timezone")
        return f"Current time: {datetime.now(tz).isoformat()}"
