"""stdio Transport — newline-delimited JSON-RPC on stdin/stdout.

Invariants:
    - One JSON message (or batch) per line; one response line per non-notification
    - stdout carries protocol only: logging goes to stderr
    - Blank lines ignored; EOF ends the loop cleanly
    - Reads happen in a worker thread; the event loop keeps running between lines
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, TextIO

from toolserver.services.jsonrpc_dispatch import JsonRpcDispatcher

logger = logging.getLogger(__name__)

LineHandler = Callable[[str], Awaitable[Any]]


async def run_line_loop(
    handle_line: LineHandler, reader: TextIO, writer: TextIO,
) -> int:
    """Feed each non-blank line to handle_line, write responses. Returns lines handled."""
    handled = 0
    while True:
        line = await asyncio.to_thread(reader.readline)
        if not line:
            break
        line = line.strip()
        if not line:
            continue
        response = await handle_line(line)
        handled += 1
        if response is not None:
            writer.write(json.dumps(response, ensure_ascii=False) + "\n")
            writer.flush()
    return handled


async def serve_stdio(
    dispatcher: JsonRpcDispatcher, reader: TextIO, writer: TextIO,
) -> int:
    """Serve JSON-RPC over the given streams until EOF."""
    logger.info("stdio server started", extra={"transport": "stdio"})
    try:
        return await run_line_loop(dispatcher.handle, reader, writer)
    finally:
        await dispatcher.aclose()
        logger.info("stdio server stopped", extra={"transport": "stdio"})
