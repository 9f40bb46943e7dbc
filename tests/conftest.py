"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from fake_news_pipeline.config import Settings
from fake_news_pipeline.llm.ollama_client import OllamaClient
from fake_news_pipeline.llm.prompt_builder import PromptBuilder


SAMPLE_NEWS = (
    "O governo anunciou hoje um novo programa de vacinação que deve alcançar "
    "todas as regiões do país até o final do ano, segundo o ministério da saúde. "
    "A campanha começa pelas capitais e inclui postos volantes nas áreas rurais."
)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"RATE_LIMIT_MAX_REQUESTS": 2})
    """
    return Settings(
        # === Application ===
        APP_NAME="Fake News Pipeline (Test)",
        APP_VERSION="1.0.0",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Ollama ===
        OLLAMA_BASE_URL="http://ollama.test:11434",
        OLLAMA_MODEL="llama3.2:1b",

        # === Stages ===
        CLASSIFIER_URL="http://classifier.test",
        SUMMARIZER_URL="http://summarizer.test",
        DOWNSTREAM_TIMEOUT=5.0,

        # === Rate limiting ===
        RATE_LIMIT_WINDOW_SECONDS=900,
        RATE_LIMIT_MAX_REQUESTS=100,

        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def sample_news() -> str:
    """A realistic Portuguese news text longer than the excerpt length."""
    return SAMPLE_NEWS


@pytest.fixture
def prompt_builder() -> PromptBuilder:
    """Prompt builder using the packaged templates."""
    return PromptBuilder()


def ollama_reply(content: Any, model: str = "llama3.2:1b") -> dict:
    """Body of a successful non-streaming /api/chat reply."""
    return {
        "model": model,
        "created_at": "2026-10-19T12:00:00Z",
        "message": {"role": "assistant", "content": content},
        "done": True,
    }


@pytest.fixture
def ollama_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for a MockTransport standing in for the Ollama server.

    `replies` is either a list of message contents (served in order, the
    last one repeated) or a callable receiving the httpx.Request.
    The transport records every prompt it receives in `transport.prompts`.
    """

    def factory(replies):
        prompts: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            prompts.append(body["messages"][0]["content"])
            if callable(replies):
                return replies(request)
            content = replies[min(len(prompts), len(replies)) - 1]
            return httpx.Response(200, json=ollama_reply(content, body["model"]))

        transport = httpx.MockTransport(handler)
        transport.prompts = prompts
        return transport

    return factory


@pytest.fixture
def make_ollama_client(test_settings: Settings) -> Callable[[httpx.MockTransport], OllamaClient]:
    """Build an OllamaClient bound to a mock transport."""

    def factory(transport: httpx.AsyncBaseTransport) -> OllamaClient:
        return OllamaClient(
            base_url=test_settings.OLLAMA_BASE_URL,
            model=test_settings.OLLAMA_MODEL,
            timeout=test_settings.DOWNSTREAM_TIMEOUT,
            transport=transport,
        )

    return factory
