"""
Classifier stage: decides whether a news text is true or fake.

Flow: classification prompt -> model call -> label extraction -> verdict ->
summarizer call -> result with the classifier's own metadata.
"""

import time

import structlog

from fake_news_pipeline.exceptions import (
    UpstreamCallError,
    pipeline_error_from_upstream,
)
from fake_news_pipeline.llm.label_extractor import resolve_verdict
from fake_news_pipeline.llm.ollama_client import OllamaClient
from fake_news_pipeline.llm.prompt_builder import PromptBuilder
from fake_news_pipeline.models.enums import CANDIDATE_LABELS
from fake_news_pipeline.models.pipeline_models import (
    PipelineMetadata,
    PipelineResult,
    make_excerpt,
)
from fake_news_pipeline.monitoring.metrics import verdicts_total
from fake_news_pipeline.stages.stage_client import SummarizerClient


logger = structlog.get_logger(__name__)


class ClassifierStage:
    """
    Orchestrates one classification request.

    Input is already validated by the API layer; elapsed time is measured
    from the moment `classify` is entered.
    """

    def __init__(
        self,
        llm_client: OllamaClient,
        prompt_builder: PromptBuilder,
        summarizer_client: SummarizerClient,
        excerpt_length: int = 200,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.summarizer_client = summarizer_client
        self.excerpt_length = excerpt_length

    async def classify(self, text: str) -> PipelineResult:
        """
        Classify `text` and return the composed pipeline result.

        Raises:
            RateLimitedError / UpstreamUnavailableError: model or summarizer failed
        """
        start_time = time.perf_counter()
        logger.info("Classifying text", text_length=len(text))

        prompt = self.prompt_builder.build_classification_prompt(text, CANDIDATE_LABELS)

        try:
            llm_response = await self.llm_client.chat(prompt)
            verdict = resolve_verdict(llm_response.content, CANDIDATE_LABELS)
            verdicts_total.labels(verdict=verdict.kind.value).inc()

            logger.info(
                "Classification completed",
                verdict=verdict.kind.value,
                model=llm_response.model_version,
                latency_ms=llm_response.latency_ms,
            )

            summary_result = await self.summarizer_client.summarize(text, verdict)
        except UpstreamCallError as exc:
            logger.error(
                "Classification failed on upstream call",
                failure=exc.failure.value,
                error=exc.message,
                details=exc.details,
            )
            raise pipeline_error_from_upstream(exc) from exc

        processing_time_ms = int((time.perf_counter() - start_time) * 1000)

        return PipelineResult(
            text=make_excerpt(text, self.excerpt_length),
            is_fake_news=verdict.is_fake_news,
            verdict=verdict.kind,
            summary=summary_result.summary,
            metadata=PipelineMetadata(
                model=self.llm_client.model,
                processing_time_ms=processing_time_ms,
            ),
        )
