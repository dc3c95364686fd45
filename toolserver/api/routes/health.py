"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 200 with per-provider configuration;
      an unconfigured provider does not make the server unready (basic tools still work)
"""

import logging
from fastapi import APIRouter, Depends, status

from toolserver.config import Settings, get_settings
from toolserver.services.tools_registry import list_tools

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": settings.server_name,
        "version": settings.server_version,
    }


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    """Readiness probe — reports which providers have credentials."""
    return {
        "status": "ready",
        "checks": {
            "github": "configured" if settings.github_configured else "not_configured",
            "gitlab": "configured" if settings.gitlab_configured else "not_configured",
        },
        "tools": len(list_tools(settings)),
    }
