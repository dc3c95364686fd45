"""JSON-RPC Dispatch — one envelope handler shared by the HTTP, Lambda and stdio transports.

Invariants:
    - handle() never raises: every failure becomes a JSON-RPC error object
    - Notifications (no `id`) never produce a response; batches drop them
    - Responses echo the request id verbatim
    - Methods: initialize, ping, tools/list, tools/call — explicit dict, no getattr

Design Decisions:
    - Transports stay thin: they decode bytes/lines and hand the payload here
    - Batches processed sequentially: response order matches request order
"""

import json
import logging
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from toolserver.config import Settings, get_settings
from toolserver.core.errors import JsonRpcError
from toolserver.core.jsonrpc import (
    DEFAULT_PROTOCOL_VERSION,
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    error_response,
    success_response,
)
from toolserver.schemas.jsonrpc import InitializeParams, JsonRpcRequest, ToolCallParams
from toolserver.services.tool_dispatch import ToolDispatch

logger = logging.getLogger(__name__)

MethodHandler = Callable[[JsonRpcRequest], Awaitable[Any]]


def _validation_details(exc: ValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]


class JsonRpcDispatcher:
    """Routes JSON-RPC methods to the tool dispatch surface."""

    def __init__(self, tools: ToolDispatch, settings: Settings):
        self.tools = tools
        self._settings = settings
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    async def handle(self, payload: Any) -> dict | list | None:
        """Handle raw text/bytes, a decoded request, or a batch."""
        if isinstance(payload, (bytes, str)):
            try:
                payload = json.loads(payload)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning(f"JSON-RPC parse error: {e}")
                return error_response(None, PARSE_ERROR, "Parse error")

        if isinstance(payload, list):
            if not payload:
                return error_response(None, INVALID_REQUEST, "Invalid Request")
            responses = []
            for message in payload:
                response = await self._handle_one(message)
                if response is not None:
                    responses.append(response)
            return responses or None

        return await self._handle_one(payload)

    async def _handle_one(self, message: Any) -> dict | None:
        if not isinstance(message, dict):
            return error_response(None, INVALID_REQUEST, "Invalid Request")
        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError as e:
            raw_id = message.get("id")
            request_id = raw_id if isinstance(raw_id, (str, int)) else None
            return error_response(
                request_id, INVALID_REQUEST, "Invalid Request",
                _validation_details(e),
            )

        try:
            result = await self._route(request)
        except JsonRpcError as e:
            logger.warning(
                f"JSON-RPC error on {request.method}: {e.message}",
                extra={"method": request.method, "request_id": request.id},
            )
            response = error_response(request.id, e.rpc_code, e.message, e.data)
        except Exception as e:
            logger.error(
                f"Unhandled error on {request.method}: {e}",
                extra={"method": request.method, "request_id": request.id},
                exc_info=True,
            )
            response = error_response(
                request.id, INTERNAL_ERROR, "Internal error", str(e),
            )
        else:
            response = success_response(request.id, result)

        if request.is_notification:
            return None
        return response

    async def _route(self, request: JsonRpcRequest) -> Any:
        handler = self._methods.get(request.method)
        if not handler:
            raise JsonRpcError(
                METHOD_NOT_FOUND, f"Method not found: {request.method}",
            )
        logger.debug(
            f"JSON-RPC {request.method}",
            extra={"method": request.method, "request_id": request.id},
        )
        return await handler(request)

    @staticmethod
    def _params(request: JsonRpcRequest) -> dict:
        if request.params is None:
            return {}
        if not isinstance(request.params, dict):
            raise JsonRpcError(INVALID_PARAMS, "params must be an object")
        return request.params

    async def _initialize(self, request: JsonRpcRequest) -> dict:
        try:
            params = InitializeParams.model_validate(self._params(request))
        except ValidationError as e:
            raise JsonRpcError(INVALID_PARAMS, "Invalid params", _validation_details(e))
        return {
            "protocolVersion": params.protocolVersion or DEFAULT_PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {
                "name": self._settings.server_name,
                "version": self._settings.server_version,
            },
        }

    async def _ping(self, request: JsonRpcRequest) -> dict:
        return {}

    async def _tools_list(self, request: JsonRpcRequest) -> dict:
        return {"tools": self.tools.list_tools()}

    async def _tools_call(self, request: JsonRpcRequest) -> dict:
        try:
            params = ToolCallParams.model_validate(self._params(request))
        except ValidationError as e:
            raise JsonRpcError(INVALID_PARAMS, "Invalid params", _validation_details(e))
        return await self.tools.execute(params.name, params.arguments)

    async def aclose(self) -> None:
        await self.tools.aclose()


# ADR: process-wide dispatcher for the long-running HTTP app.
# Lambda builds one per invocation (event loop differs per call).
_dispatcher: JsonRpcDispatcher | None = None


def build_rpc_dispatcher(settings: Settings | None = None) -> JsonRpcDispatcher:
    settings = settings or get_settings()
    return JsonRpcDispatcher(ToolDispatch(settings), settings)


def get_rpc_dispatcher() -> JsonRpcDispatcher:
    """FastAPI dependency: the shared dispatcher, built on first use."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = build_rpc_dispatcher()
    return _dispatcher


async def close_rpc_dispatcher() -> None:
    global _dispatcher
    if _dispatcher is not None:
        await _dispatcher.aclose()
        _dispatcher = None
