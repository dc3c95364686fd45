"""MCP Endpoint — JSON-RPC over HTTP POST.

Invariants:
    - Body is passed raw to the dispatcher: parse errors come back as JSON-RPC -32700
    - Notification-only requests answer 202 with an empty body
    - JSON-RPC errors are HTTP 200 (the envelope carries the failure)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from toolserver.services.jsonrpc_dispatch import JsonRpcDispatcher, get_rpc_dispatcher

logger = logging.getLogger(__name__)
router = APIRouter(tags=["mcp"])


@router.post("/mcp")
async def handle_jsonrpc(
    request: Request,
    dispatcher: JsonRpcDispatcher = Depends(get_rpc_dispatcher),
):
    """Dispatch a JSON-RPC request, notification or batch."""
    body = await request.body()
    response = await dispatcher.handle(body)
    if response is None:
        return Response(status_code=status.HTTP_202_ACCEPTED)
    return JSONResponse(content=response)
