"""
FastAPI dependency injection for the pipeline stages.

Expensive resources (HTTP clients, prompt builder, rate limiter) are created
once per application and kept on `app.state`, so several stage apps can live
in one process with their own settings. Stage objects are lightweight and
built per request from those singletons.
"""

from pathlib import Path
from typing import Callable, TypeVar

from fastapi import Depends, Request

from fake_news_pipeline.config import Settings
from fake_news_pipeline.exceptions import RateLimitedError
from fake_news_pipeline.llm.ollama_client import OllamaClient
from fake_news_pipeline.llm.prompt_builder import PromptBuilder
from fake_news_pipeline.monitoring.metrics import rate_limited_total
from fake_news_pipeline.security.rate_limiter import SlidingWindowRateLimiter
from fake_news_pipeline.stages.classifier import ClassifierStage
from fake_news_pipeline.stages.gateway import GatewayStage
from fake_news_pipeline.stages.stage_client import ClassifierClient, SummarizerClient
from fake_news_pipeline.stages.summarizer import SummarizerStage

T = TypeVar("T")


def _app_singleton(request: Request, name: str, factory: Callable[[], T]) -> T:
    """Return `app.state.<name>`, creating it on first use."""
    state = request.app.state
    instance = getattr(state, name, None)
    if instance is None:
        instance = factory()
        setattr(state, name, instance)
    return instance


def get_settings(request: Request) -> Settings:
    """
    Get the settings the application was created with.

    Returns:
        Settings instance
    """
    return request.app.state.settings


async def get_llm_client(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> OllamaClient:
    """
    Get singleton LLM client with connection pooling.

    Returns:
        OllamaClient instance
    """
    return _app_singleton(
        request,
        "llm_client",
        lambda: OllamaClient(
            base_url=settings.OLLAMA_BASE_URL,
            model=settings.OLLAMA_MODEL,
            timeout=settings.DOWNSTREAM_TIMEOUT,
        ),
    )


async def get_prompt_builder(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> PromptBuilder:
    """
    Get singleton prompt builder.

    Loads Jinja2 templates once and reuses them across requests.
    """
    templates_dir = Path(settings.PROMPT_TEMPLATES_DIR) if settings.PROMPT_TEMPLATES_DIR else None
    return _app_singleton(
        request,
        "prompt_builder",
        lambda: PromptBuilder(
            templates_dir=templates_dir,
            summary_max_words=settings.SUMMARY_MAX_WORDS,
        ),
    )


async def get_rate_limiter(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SlidingWindowRateLimiter:
    """Get the process-wide rate window table of the gateway."""
    return _app_singleton(
        request,
        "rate_limiter",
        lambda: SlidingWindowRateLimiter(
            max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        ),
    )


async def get_classifier_client(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> ClassifierClient:
    """Get singleton client for the classifier stage (used by the gateway)."""
    return _app_singleton(
        request,
        "classifier_client",
        lambda: ClassifierClient(settings.CLASSIFIER_URL, timeout=settings.DOWNSTREAM_TIMEOUT),
    )


async def get_summarizer_client(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SummarizerClient:
    """Get singleton client for the summarizer stage (used by the classifier)."""
    return _app_singleton(
        request,
        "summarizer_client",
        lambda: SummarizerClient(settings.SUMMARIZER_URL, timeout=settings.DOWNSTREAM_TIMEOUT),
    )


def get_client_id(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """
    Identify the caller for rate limiting.

    X-Forwarded-For is honoured only when TRUST_FORWARDED_FOR is set
    (gateway deployed behind a reverse proxy).
    """
    if settings.TRUST_FORWARDED_FOR:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(
    client_id: str = Depends(get_client_id),
    limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> str:
    """
    Reject the request when the client is over its window quota.

    Returns:
        The client id, for logging

    Raises:
        RateLimitedError: client exceeded the window threshold
    """
    if not limiter.allow(client_id):
        rate_limited_total.labels(stage="gateway").inc()
        window_minutes = max(1, round(limiter.window_seconds / 60))
        raise RateLimitedError(
            f"Too many requests, try again in {window_minutes} minutes",
            retry_after=limiter.retry_after(client_id),
        )
    return client_id


def get_gateway_stage(
    classifier_client: ClassifierClient = Depends(get_classifier_client),
) -> GatewayStage:
    """Create gateway stage with injected dependencies."""
    return GatewayStage(classifier_client=classifier_client)


def get_classifier_stage(
    llm_client: OllamaClient = Depends(get_llm_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    summarizer_client: SummarizerClient = Depends(get_summarizer_client),
    settings: Settings = Depends(get_settings),
) -> ClassifierStage:
    """
    Create classifier stage with injected dependencies.

    Note: the stage is NOT cached because it's lightweight and stateless.
    All heavy resources (clients, builder) are singletons.
    """
    return ClassifierStage(
        llm_client=llm_client,
        prompt_builder=prompt_builder,
        summarizer_client=summarizer_client,
        excerpt_length=settings.EXCERPT_LENGTH,
    )


def get_summarizer_stage(
    llm_client: OllamaClient = Depends(get_llm_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    settings: Settings = Depends(get_settings),
) -> SummarizerStage:
    """Create summarizer stage with injected dependencies."""
    return SummarizerStage(
        llm_client=llm_client,
        prompt_builder=prompt_builder,
        excerpt_length=settings.EXCERPT_LENGTH,
    )
