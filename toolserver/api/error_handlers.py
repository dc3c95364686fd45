"""Error Handlers — global exception handlers for the HTTP app.

Invariants:
    - ToolServerError → structured JSON with error code, message, severity
    - Exception (catch-all) → never leaks internal details
    - JSON-RPC failures never reach these handlers: the dispatcher answers them
      inside the envelope

Design Decisions:
    - Two-layer handler: domain (ToolServerError), catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from toolserver.core.errors import ToolServerError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register tool server domain/infrastructure error handler."""

    @app.exception_handler(ToolServerError)
    async def tool_server_error_handler(request: Request, exc: ToolServerError):
        """Handle all tool server domain/infrastructure errors."""
        logger.error(
            f"ToolServerError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
