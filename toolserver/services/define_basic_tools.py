"""Basic Tool Schemas — MCP Tool format for echo and clock tools.

Invariants:
    - Neither tool touches the network or any provider token
"""

TOOLS_BASIC = [
    {
        "name": "echo",
        "description": "Echoes back the message it is given.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "message": {
                    "type": "string",
                    "description": "The message to echo back",
                },
            },
            "required": ["message"],
        },
    },
    {
        "name": "get_time",
        "description": (
            "Returns the current date and time as ISO-8601. "
            "UTC unless an IANA timezone is given."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "timezone": {
                    "type": "string",
                    "description": "IANA timezone name, e.g. Europe/Madrid",
                },
            },
        },
    },
]
