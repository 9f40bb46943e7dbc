"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to HTTP status codes. Every body carries the error
kind and the request correlation id; internal error text stays in the logs.
"""

import uuid

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fake_news_pipeline.api.models import ErrorDetail, ErrorResponse
from fake_news_pipeline.exceptions import PipelineError, RateLimitedError
from fake_news_pipeline.models.enums import ErrorKind
from fake_news_pipeline.monitoring.metrics import pipeline_requests_total

logger = structlog.get_logger(__name__)


def _correlation_id(request: Request) -> str:
    """Request id bound by RequestTracingMiddleware (fresh one if absent)."""
    return getattr(request.state, "request_id", None) or uuid.uuid4().hex


def _count(request: Request, kind: ErrorKind) -> None:
    stage = getattr(request.app.state, "stage", None)
    if stage is not None:
        pipeline_requests_total.labels(stage=stage.value, outcome=kind.value).inc()


def _render(status_code: int, body: ErrorResponse, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """
    Handle errors raised by the pipeline stages.

    Status comes from the exception (400, 429, 500 or 503).
    """
    correlation_id = _correlation_id(request)
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Pipeline error",
        error_kind=exc.kind.value,
        status_code=exc.status_code,
        error=exc.message,
        correlation_id=correlation_id,
    )
    _count(request, exc.kind)

    headers = None
    if isinstance(exc, RateLimitedError) and exc.retry_after:
        headers = {"Retry-After": str(exc.retry_after)}

    details = None
    if exc.kind is ErrorKind.INVALID_INPUT and exc.details:
        details = [ErrorDetail(**detail) for detail in exc.details]

    return _render(
        exc.status_code,
        ErrorResponse(
            error=exc.kind.value,
            message=exc.message,
            id=correlation_id,
            details=details,
        ),
        headers=headers,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation errors (missing, wrongly typed, bad length).

    Maps to 400 Bad Request (client error).
    """
    details = [
        ErrorDetail(
            field=".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body",
            message=error.get("msg", "invalid value"),
        )
        for error in exc.errors()
    ]
    logger.warning(
        "Invalid request format",
        errors=[detail.model_dump() for detail in details],
    )
    _count(request, ErrorKind.INVALID_INPUT)

    return _render(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(
            error=ErrorKind.INVALID_INPUT.value,
            message="Invalid request data",
            id=_correlation_id(request),
            details=details,
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle framework HTTP errors.

    404 becomes route_not_found with the requested path echoed back.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.info("Route not found", path=request.url.path)
        return _render(
            exc.status_code,
            ErrorResponse(
                error=ErrorKind.ROUTE_NOT_FOUND.value,
                message="Route not found",
                id=_correlation_id(request),
                path=request.url.path,
            ),
        )

    kind = ErrorKind.INVALID_INPUT if exc.status_code < 500 else ErrorKind.INTERNAL_UNHANDLED
    return _render(
        exc.status_code,
        ErrorResponse(
            error=kind.value,
            message=str(exc.detail),
            id=_correlation_id(request),
        ),
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    correlation_id = _correlation_id(request)
    logger.error(
        "Unexpected error",
        error_type=type(exc).__name__,
        correlation_id=correlation_id,
        exc_info=exc,
    )
    _count(request, ErrorKind.INTERNAL_UNHANDLED)

    return _render(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error=ErrorKind.INTERNAL_UNHANDLED.value,
            message="An unexpected error occurred",
            id=correlation_id,
        ),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    PipelineError: pipeline_error_handler,
    RequestValidationError: request_validation_error_handler,
    StarletteHTTPException: http_exception_handler,
    Exception: generic_error_handler,
}
