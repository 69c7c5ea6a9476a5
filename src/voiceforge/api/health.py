"""Health check endpoints for orchestration probes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from voiceforge.api.config import DEFAULT_API_CONFIG
from voiceforge.core.resilience import OperationTimeout, async_timeout

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthStatus(BaseModel):
    """Health check response."""
    status: str
    checks: dict[str, bool] | None = None


@router.get("/live", response_model=HealthStatus)
async def liveness() -> HealthStatus:
    """Liveness probe - is the process running?"""
    return HealthStatus(status="alive")


@router.get("/ready")
async def readiness(request: Request) -> JSONResponse:
    """Readiness probe - can we serve synthesis traffic?

    Checks:
    - Gateway service initialized
    - Synthesis engine answers its health endpoint

    Returns 503 if any dependency is unhealthy.
    """
    config = getattr(request.app.state, "config", None) or DEFAULT_API_CONFIG
    forge = getattr(request.app.state, "forge", None)
    checks = {"service": forge is not None, "engine": False}

    if forge is not None:
        try:
            checks["engine"] = await async_timeout(
                forge.engine_available(), config.timeouts.engine_ready, "engine_ready"
            )
        except OperationTimeout as e:
            logger.warning(f"Engine health check failed: {e}")

    all_healthy = all(checks.values())

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content={
            "status": "ready" if all_healthy else "not_ready",
            "checks": checks,
        },
    )


@router.get("/startup", response_model=HealthStatus)
async def startup(request: Request) -> JSONResponse:
    """Startup probe - has initialization completed?"""
    initialized = getattr(request.app.state, "initialized", False)

    return JSONResponse(
        status_code=200 if initialized else 503,
        content={
            "status": "started" if initialized else "starting",
        },
    )
