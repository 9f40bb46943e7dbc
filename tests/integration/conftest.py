"""Integration test fixtures.

Wires the three stage apps together in-process: the gateway reaches the
classifier and the classifier reaches the summarizer through
httpx.ASGITransport, and both LLM stages talk to a mocked Ollama server.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import httpx
import pytest
from fastapi import FastAPI

from fake_news_pipeline.api.dependencies import (
    get_classifier_client,
    get_llm_client,
    get_summarizer_client,
)
from fake_news_pipeline.config import Settings
from fake_news_pipeline.main import create_app
from fake_news_pipeline.models.enums import StageName
from fake_news_pipeline.stages.stage_client import ClassifierClient, SummarizerClient


@dataclass
class Pipeline:
    """The three chained apps plus the Ollama transports behind them."""

    gateway: FastAPI
    classifier: FastAPI
    summarizer: FastAPI
    classifier_ollama: httpx.MockTransport
    summarizer_ollama: httpx.MockTransport

    def client(self) -> httpx.AsyncClient:
        """Async client calling the gateway app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=self.gateway),
            base_url="http://gateway.test",
        )


@pytest.fixture
def build_pipeline(
    test_settings: Settings,
    ollama_transport,
    make_ollama_client,
) -> Callable[..., Pipeline]:
    """Factory building a pipeline with scripted model replies.

    Args (of the returned factory):
        classification: replies for the classifier's model calls
        summary: replies for the summarizer's model calls
        settings: optional settings override for all three apps
    """

    def factory(
        classification=("notícia verdadeira",),
        summary=("Resumo gerado pelo modelo.",),
        settings: Optional[Settings] = None,
    ) -> Pipeline:
        settings = settings or test_settings
        classifier_ollama = ollama_transport(classification if callable(classification) else list(classification))
        summarizer_ollama = ollama_transport(summary if callable(summary) else list(summary))

        summarizer_app = create_app(StageName.SUMMARIZER, settings)
        summarizer_llm = make_ollama_client(summarizer_ollama)
        summarizer_app.dependency_overrides[get_llm_client] = lambda: summarizer_llm

        classifier_app = create_app(StageName.CLASSIFIER, settings)
        classifier_llm = make_ollama_client(classifier_ollama)
        summarizer_client = SummarizerClient(
            settings.SUMMARIZER_URL,
            timeout=settings.DOWNSTREAM_TIMEOUT,
            transport=httpx.ASGITransport(app=summarizer_app),
        )
        classifier_app.dependency_overrides[get_llm_client] = lambda: classifier_llm
        classifier_app.dependency_overrides[get_summarizer_client] = lambda: summarizer_client

        gateway_app = create_app(StageName.GATEWAY, settings)
        classifier_client = ClassifierClient(
            settings.CLASSIFIER_URL,
            timeout=settings.DOWNSTREAM_TIMEOUT,
            transport=httpx.ASGITransport(app=classifier_app),
        )
        gateway_app.dependency_overrides[get_classifier_client] = lambda: classifier_client

        return Pipeline(
            gateway=gateway_app,
            classifier=classifier_app,
            summarizer=summarizer_app,
            classifier_ollama=classifier_ollama,
            summarizer_ollama=summarizer_ollama,
        )

    return factory
