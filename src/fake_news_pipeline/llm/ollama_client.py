"""
Ollama client implementation for LLM inference.

Communicates with the Ollama chat API using httpx AsyncClient. Supports:
- Non-streaming chat completion (POST /api/chat)
- Connection pooling via a persistent client
- Timeout clipped by the propagated request deadline
- Structured failure variants (no retries, fail fast)
- Health checks
"""

import time
from typing import Any, Optional

import httpx
import structlog

from fake_news_pipeline.deadline import remaining_timeout
from fake_news_pipeline.llm.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMMalformedResponseError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from fake_news_pipeline.models.llm_models import LLMGenerationResponse
from fake_news_pipeline.monitoring.metrics import (
    downstream_failures_total,
    llm_latency_seconds,
    llm_placeholder_responses_total,
)


logger = structlog.get_logger(__name__)

# Substituted when a JSON reply carries no message content
INVALID_REPLY_PLACEHOLDER = "[Erro: resposta inválida do modelo]"


class OllamaClient:
    """
    Ollama-specific LLM client using httpx for async HTTP communication.

    API Endpoints:
    - POST /api/chat: Chat completion (stream disabled)
    - GET /api/tags: List available models (health check)

    Failures raise an LLMClientError subclass whose `failure` attribute is
    the structured variant (timeout, connection refused, ...).
    """

    def __init__(
        self,
        base_url: str = "http://ollama:11434",
        model: str = "llama3.2:1b",
        timeout: float = 30.0,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Ollama client.

        Args:
            base_url: Ollama server URL
            model: Default model name
            timeout: Request timeout in seconds
            connection_limits: httpx connection pool limits (default: 10 max connections)
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.timeout = timeout

        # Set default connection limits if not provided
        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        # Create persistent async client lazily for connection pooling
        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

        logger.info(
            "Ollama client initialized",
            base_url=self.base_url,
            model=model,
            timeout=timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
                follow_redirects=True
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    def _fail(self, error_cls: type, message: str, model: str, **details: Any):
        """Count and build a failure exception."""
        error = error_cls(message, details={"model": model, **details})
        downstream_failures_total.labels(target="ollama", failure=error.failure.value).inc()
        return error

    async def chat(self, prompt: str, model: Optional[str] = None) -> LLMGenerationResponse:
        """
        Send a single-message chat request.

        POST /api/chat with payload:
        {
            "model": "llama3.2:1b",
            "stream": false,
            "messages": [{"role": "user", "content": "..."}]
        }

        Response:
        {
            "model": "llama3.2:1b",
            "created_at": "2026-10-19T...",
            "message": {"role": "assistant", "content": "..."},
            "done": true
        }

        Returns:
            LLMGenerationResponse; `content` is the placeholder text when the
            reply is valid JSON without message content.

        Raises:
            LLMTimeoutError: timeout or spent request deadline
            LLMConnectionError: server unreachable
            LLMRateLimitError: server answered 429
            LLMModelNotAvailableError: server answered 404 or 503
            LLMMalformedResponseError: reply body is not JSON
            LLMGenerationError: any other HTTP error
        """
        model_name = model or self.model
        timeout = remaining_timeout(self.timeout)
        if timeout <= 0:
            raise self._fail(LLMTimeoutError, "Request deadline already exceeded", model_name)

        payload = {
            "model": model_name,
            "stream": False,
            "messages": [
                {"role": "user", "content": prompt}
            ],
        }

        logger.info(
            "Sending chat request to Ollama",
            model=model_name,
            prompt_length=len(prompt),
            timeout=round(timeout, 3),
        )

        start_time = time.perf_counter()
        try:
            client = await self._get_client()
            response = await client.post("/api/chat", json=payload, timeout=timeout)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Ollama request timeout", timeout=timeout, error=str(e))
            raise self._fail(
                LLMTimeoutError, f"Request timeout after {timeout:.1f}s", model_name, timeout=timeout
            ) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error("Ollama HTTP error", status_code=status_code, error_text=e.response.text[:500])
            if status_code == 429:
                error_cls = LLMRateLimitError
            elif status_code in (404, 503):
                error_cls = LLMModelNotAvailableError
            else:
                error_cls = LLMGenerationError
            raise self._fail(
                error_cls, f"Ollama returned status {status_code}", model_name, status=status_code
            ) from e
        except httpx.TransportError as e:
            logger.warning("Ollama network error", error=str(e), error_type=type(e).__name__)
            raise self._fail(
                LLMConnectionError, f"Network error: {e}", model_name, error_type=type(e).__name__
            ) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        try:
            response_data = response.json()
        except ValueError as e:
            logger.error("Failed to parse Ollama response JSON", error=str(e))
            raise self._fail(LLMMalformedResponseError, "Invalid JSON response from Ollama", model_name) from e

        if not isinstance(response_data, dict):
            response_data = {}

        message = response_data.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        placeholder_used = not (isinstance(content, str) and content)
        if placeholder_used:
            logger.warning(
                "Ollama reply without message content, using placeholder",
                response_keys=sorted(response_data.keys()),
            )
            llm_placeholder_responses_total.labels(model=model_name).inc()
            content = INVALID_REPLY_PLACEHOLDER

        model_version = response_data.get("model") or model_name

        logger.info(
            "Ollama chat successful",
            model=model_version,
            latency_ms=latency_ms,
            response_length=len(content),
            placeholder_used=placeholder_used,
        )
        llm_latency_seconds.labels(model=model_version, success="true").observe(latency_ms / 1000.0)

        return LLMGenerationResponse(
            content=content,
            model_version=str(model_version),
            latency_ms=latency_ms,
            created_at=response_data.get("created_at"),
            placeholder_used=placeholder_used,
        )

    async def health_check(self) -> bool:
        """
        Check Ollama server health via GET /api/tags.

        Returns True if server responds, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get("/api/tags", timeout=5.0)
            response.raise_for_status()
            logger.debug("Ollama health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Ollama health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Ollama client connection")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"model={self.model}, "
            f"timeout={self.timeout}s)"
        )
