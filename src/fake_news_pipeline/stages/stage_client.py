"""
HTTP clients for calls between pipeline stages.

Gateway -> Classifier and Classifier -> Summarizer are single awaited POSTs
with the shared downstream timeout, clipped by the request deadline. The
request id and deadline travel in headers. No retries.
"""

from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from fake_news_pipeline.deadline import outbound_headers, remaining_timeout
from fake_news_pipeline.exceptions import StageCallError
from fake_news_pipeline.models.enums import UpstreamFailure
from fake_news_pipeline.models.pipeline_models import (
    ClassifyRequest,
    PipelineResult,
    SummarizeRequest,
)
from fake_news_pipeline.models.verdict import Verdict
from fake_news_pipeline.monitoring.metrics import downstream_failures_total


logger = structlog.get_logger(__name__)

USER_AGENT = "FakeNewsPipeline/1.0"

# Downstream status -> failure variant; anything else is OTHER
STATUS_FAILURES = {
    429: UpstreamFailure.RATE_LIMITED,
    503: UpstreamFailure.MODEL_UNAVAILABLE,
}


class StageClient:
    """
    Base client for a downstream pipeline stage.

    Subclasses define the endpoint path and the typed request/response.
    """

    target: str = "stage"
    path: str = "/"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize stage client.

        Args:
            base_url: Base URL of the downstream stage
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests chain apps with httpx.ASGITransport)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={"User-Agent": USER_AGENT},
            )
        return self._client

    def _fail(self, failure: UpstreamFailure, message: str, **details: Any) -> StageCallError:
        downstream_failures_total.labels(target=self.target, failure=failure.value).inc()
        return StageCallError(message, failure=failure, details={"target": self.target, **details})

    async def _post(self, payload: dict) -> PipelineResult:
        """POST payload to the stage endpoint and parse the PipelineResult."""
        timeout = remaining_timeout(self.timeout)
        if timeout <= 0:
            raise self._fail(UpstreamFailure.TIMEOUT, "Request deadline already exceeded")

        logger.info("Forwarding to downstream stage", target=self.target, timeout=round(timeout, 3))

        try:
            client = await self._get_client()
            response = await client.post(
                self.path,
                json=payload,
                timeout=timeout,
                headers=outbound_headers(timeout),
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise self._fail(UpstreamFailure.TIMEOUT, f"{self.target} timed out after {timeout:.1f}s") from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            failure = STATUS_FAILURES.get(status_code, UpstreamFailure.OTHER)
            raise self._fail(failure, f"{self.target} returned status {status_code}", status=status_code) from e
        except httpx.TransportError as e:
            raise self._fail(
                UpstreamFailure.CONNECTION_REFUSED,
                f"{self.target} unreachable: {e}",
                error_type=type(e).__name__,
            ) from e

        try:
            return PipelineResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise self._fail(UpstreamFailure.MALFORMED_RESPONSE, f"{self.target} returned a malformed result") from e

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url}, timeout={self.timeout}s)"


class ClassifierClient(StageClient):
    """Gateway -> Classifier."""

    target = "classifier"
    path = "/classify"

    async def classify(self, text: str) -> PipelineResult:
        request = ClassifyRequest(text=text)
        return await self._post(request.model_dump(mode="json"))


class SummarizerClient(StageClient):
    """Classifier -> Summarizer."""

    target = "summarizer"
    path = "/summarize"

    async def summarize(self, text: str, verdict: Verdict) -> PipelineResult:
        request = SummarizeRequest(text=text, is_fake_news=verdict.is_fake_news)
        return await self._post(request.model_dump(mode="json", by_alias=True))
