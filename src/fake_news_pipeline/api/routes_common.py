"""
Routes shared by every stage: service info, liveness and process stats.
"""

import resource
import sys
import time

from fastapi import APIRouter, Depends, Request, status

from fake_news_pipeline.api.dependencies import get_settings
from fake_news_pipeline.api.models import HealthResponse, MemoryUsage, StatsResponse
from fake_news_pipeline.config import Settings

router = APIRouter()


def _max_rss_kb() -> int:
    usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is reported in bytes on macOS, kilobytes elsewhere
    return usage // 1024 if sys.platform == "darwin" else usage


@router.get("/")
async def root(request: Request, settings: Settings = Depends(get_settings)):
    """Root endpoint with service info and documentation links."""
    return {
        "service": settings.APP_NAME,
        "stage": request.app.state.stage.value,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "stats": "/stats",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def health(request: Request, settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Liveness check.

    Does not call the model or downstream stages; a stage is healthy as long
    as it can answer.
    """
    return HealthResponse(
        status="healthy",
        service=request.app.state.stage.value,
        version=settings.APP_VERSION,
    )


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Process uptime and memory",
)
async def stats(request: Request) -> StatsResponse:
    limiter = getattr(request.app.state, "rate_limiter", None)
    return StatsResponse(
        service=request.app.state.stage.value,
        uptime_seconds=round(time.monotonic() - request.app.state.started_at, 3),
        memory=MemoryUsage(max_rss_kb=_max_rss_kb()),
        rate_limited_clients=limiter.tracked_clients() if limiter is not None else None,
    )
