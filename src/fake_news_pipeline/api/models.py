"""
API-specific response models for the FastAPI endpoints.

Pipeline payloads (requests and PipelineResult) live in
fake_news_pipeline.models; these models only describe service metadata
and error bodies.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from fake_news_pipeline.models.pipeline_models import utc_now


class HealthResponse(BaseModel):
    """Response for the liveness probe."""

    status: str = Field(
        description="Liveness status",
        examples=["healthy"]
    )
    service: str = Field(
        description="Stage serving the request",
        examples=["gateway", "classifier", "summarizer"]
    )
    version: str = Field(
        description="Application version",
        examples=["1.0.0"]
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="Health check timestamp (UTC)"
    )


class MemoryUsage(BaseModel):
    """Process memory figures reported by /stats."""

    max_rss_kb: int = Field(description="Peak resident set size in kilobytes")


class StatsResponse(BaseModel):
    """Response for the process statistics endpoint."""

    service: str = Field(description="Stage serving the request")
    uptime_seconds: float = Field(ge=0, description="Seconds since the app was created")
    memory: MemoryUsage
    rate_limited_clients: Optional[int] = Field(
        default=None,
        description="Clients holding a rate window entry (gateway only)"
    )
    timestamp: datetime = Field(default_factory=utc_now, description="UTC timestamp")


class ErrorDetail(BaseModel):
    """One invalid input field."""

    field: str = Field(description="Offending field")
    message: str = Field(description="What is wrong with it")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error kind",
        examples=["invalid_input", "rate_limited", "upstream_unavailable", "internal_unhandled"]
    )
    message: str = Field(
        description="Human-readable error message (never internal error text)"
    )
    id: Optional[str] = Field(
        default=None,
        description="Opaque correlation id; the same id appears in the service logs"
    )
    details: Optional[list[ErrorDetail]] = Field(
        default=None,
        description="Invalid fields (only for invalid_input)"
    )
    path: Optional[str] = Field(
        default=None,
        description="Requested path (only for route_not_found)"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="Error timestamp (UTC)"
    )
