"""
Domain exceptions for the pipeline stages.

Two families:
- UpstreamCallError: an outbound call (model endpoint or next stage) failed.
  Carries a structured UpstreamFailure variant.
- PipelineError: what a stage reports to its own caller. Carries an
  ErrorKind and an HTTP status; the API layer renders it without leaking
  internal detail.
"""

from typing import Optional

from fake_news_pipeline.models.enums import ErrorKind, UpstreamFailure


class UpstreamCallError(Exception):
    """
    Base exception for failed outbound calls.

    `failure` is the structured variant used for status mapping.
    """
    def __init__(
        self,
        message: str,
        failure: UpstreamFailure = UpstreamFailure.OTHER,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.failure = failure
        self.details = details or {}


class StageCallError(UpstreamCallError):
    """Raised when a call to a downstream pipeline stage fails."""
    pass


class PipelineError(Exception):
    """
    Base exception for errors a stage returns to its caller.

    `message` is safe to show to the caller; `details` are only rendered
    for client errors (invalid input).
    """
    kind: ErrorKind = ErrorKind.INTERNAL_UNHANDLED
    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(PipelineError):
    """Missing, too short, too long, or wrongly typed input."""
    kind = ErrorKind.INVALID_INPUT
    status_code = 400


class RateLimitedError(PipelineError):
    """Request rejected by the rate window (ours or the model's)."""
    kind = ErrorKind.RATE_LIMITED
    status_code = 429

    def __init__(self, message: str, retry_after: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class UpstreamUnavailableError(PipelineError):
    """A downstream stage or the model endpoint failed."""
    kind = ErrorKind.UPSTREAM_UNAVAILABLE
    status_code = 500


# Status returned by classifier/summarizer for each upstream failure variant
UPSTREAM_FAILURE_STATUS: dict[UpstreamFailure, int] = {
    UpstreamFailure.TIMEOUT: 500,
    UpstreamFailure.CONNECTION_REFUSED: 503,
    UpstreamFailure.MODEL_UNAVAILABLE: 503,
    UpstreamFailure.RATE_LIMITED: 429,
    UpstreamFailure.MALFORMED_RESPONSE: 500,
    UpstreamFailure.OTHER: 500,
}


def pipeline_error_from_upstream(exc: UpstreamCallError) -> PipelineError:
    """
    Translate a failed outbound call into the error a stage reports.

    Switches on the failure variant only.
    """
    if exc.failure is UpstreamFailure.RATE_LIMITED:
        return RateLimitedError("Upstream rate limit exceeded, try again in a few seconds")

    status_code = UPSTREAM_FAILURE_STATUS[exc.failure]
    if status_code == 503:
        message = "The analysis service is temporarily unavailable, try again later"
    else:
        message = "Unable to process the request"
    return UpstreamUnavailableError(message, status_code=status_code)
