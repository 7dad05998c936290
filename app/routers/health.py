# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# /health        process is up, with environment and version
# /health/live   liveness for container restarts
# /health/ready  probes the comics table and the page image bucket
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.config import settings
from app.dependencies import BackendDep, StoryHelperDep

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Process health."""
    status: str
    service: str = "panelplay-api"
    environment: str
    version: str
    timestamp: str


class ReadinessResponse(BaseModel):
    """
    Dependency health.

    `checks` maps each probed dependency to "healthy" or
    "unhealthy: <reason>". The story helper is informational only.
    """
    status: str
    checks: dict[str, str] = Field(default_factory=dict)
    story_helper: str
    timestamp: str


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _probe(name: str, call: Callable[[], object]) -> str:
    try:
        call()
    except Exception as e:
        logger.warning(f"Readiness probe '{name}' failed: {e}")
        return f"unhealthy: {str(e)[:50]}"
    return "healthy"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health status for load balancers."""
    return HealthResponse(
        status="healthy",
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
        timestamp=_timestamp(),
    )


@router.get("/health/live")
async def liveness_check() -> dict:
    return {"status": "alive", "timestamp": _timestamp()}


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(backend: BackendDep, agent: StoryHelperDep):
    """
    Readiness check.

    Ready when the `comics` table answers and the page image bucket exists.
    """
    checks = {
        "database": _probe(
            "database",
            lambda: backend.client.table("comics").select("id").limit(1).execute(),
        ),
        "storage": _probe(
            "storage",
            lambda: backend.client.storage.get_bucket(backend.pages_bucket),
        ),
    }

    ready = all(result == "healthy" for result in checks.values())

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        story_helper="configured" if agent is not None else "not configured",
        timestamp=_timestamp(),
    )
