"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing stages without network access.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from fake_news_pipeline.models.enums import VerdictKind
from fake_news_pipeline.models.llm_models import LLMGenerationResponse
from fake_news_pipeline.models.pipeline_models import PipelineMetadata, PipelineResult


def make_llm_response(content: str, placeholder_used: bool = False) -> LLMGenerationResponse:
    return LLMGenerationResponse(
        content=content,
        model_version="llama3.2:1b",
        latency_ms=120,
        created_at="2026-10-19T12:00:00Z",
        placeholder_used=placeholder_used,
    )


@pytest.fixture
def mock_llm_client():
    """Mock OllamaClient answering every chat with a fixed reply."""
    mock = Mock()
    mock.model = "llama3.2:1b"
    mock.chat = AsyncMock(return_value=make_llm_response("notícia verdadeira"))
    return mock


@pytest.fixture
def summarizer_result():
    """PipelineResult as returned by the summarizer stage."""
    return PipelineResult(
        text="excerpt",
        is_fake_news=False,
        verdict=VerdictKind.TRUE_NEWS,
        summary="Resumo curto da notícia.",
        metadata=PipelineMetadata(model="llama3.2:1b", processing_time_ms=42),
    )


@pytest.fixture
def mock_summarizer_client(summarizer_result):
    """Mock SummarizerClient returning `summarizer_result`."""
    mock = Mock()
    mock.summarize = AsyncMock(return_value=summarizer_result)
    return mock


@pytest.fixture
def mock_classifier_client(summarizer_result):
    """Mock ClassifierClient returning a complete pipeline result."""
    mock = Mock()
    mock.classify = AsyncMock(return_value=summarizer_result)
    return mock


@pytest.fixture
def llm_response():
    """Factory for LLMGenerationResponse objects."""
    return make_llm_response
