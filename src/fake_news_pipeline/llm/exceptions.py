"""
Custom exceptions for the LLM client layer.

Each exception fixes the UpstreamFailure variant it represents, so callers
can map failures to responses without inspecting message text.
"""

from fake_news_pipeline.exceptions import UpstreamCallError
from fake_news_pipeline.models.enums import UpstreamFailure


class LLMClientError(UpstreamCallError):
    """
    Base exception for all LLM client errors.

    All LLM-specific exceptions inherit from this to allow catching
    any LLM-related error with a single except clause.
    """
    failure_variant = UpstreamFailure.OTHER

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, failure=self.failure_variant, details=details)


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to connect to the LLM inference server.

    Includes refused connections, DNS failures and dropped sockets.
    """
    failure_variant = UpstreamFailure.CONNECTION_REFUSED


class LLMTimeoutError(LLMClientError):
    """Raised when the call exceeds its timeout or the request deadline."""
    failure_variant = UpstreamFailure.TIMEOUT


class LLMRateLimitError(LLMClientError):
    """Raised when the inference server answers 429."""
    failure_variant = UpstreamFailure.RATE_LIMITED


class LLMModelNotAvailableError(LLMClientError):
    """
    Raised when the requested model cannot serve the request.

    Covers unknown models (404) and an overloaded server (503).
    """
    failure_variant = UpstreamFailure.MODEL_UNAVAILABLE


class LLMMalformedResponseError(LLMClientError):
    """Raised when the server reply body is not JSON at all."""
    failure_variant = UpstreamFailure.MALFORMED_RESPONSE


class LLMGenerationError(LLMClientError):
    """Raised for any other server-side error during generation."""
    pass
