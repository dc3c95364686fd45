"""Dev Tools Server — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ToolServerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Shared JSON-RPC dispatcher closed on shutdown (REST clients released)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: import fan-out)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from toolserver.api.error_handlers import register_error_handlers
from toolserver.infrastructure.observability import setup_logging
from toolserver.config import get_settings
from toolserver.api.routes import health, mcp
from toolserver.services.jsonrpc_dispatch import close_rpc_dispatcher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"{settings.server_name} started",
        extra={"transport": "http"},
    )
    yield
    await close_rpc_dispatcher()
    logger.info(f"{settings.server_name} shutting down")


settings = get_settings()

app = FastAPI(
    title="Dev Tools MCP Server",
    version=settings.server_version,
    lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(mcp.router)

register_error_handlers(app)
