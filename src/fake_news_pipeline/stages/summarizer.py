"""
Summarizer stage: produces a short summary of a classified news text.
"""

import time

import structlog

from fake_news_pipeline.exceptions import (
    UpstreamCallError,
    pipeline_error_from_upstream,
)
from fake_news_pipeline.llm.ollama_client import OllamaClient
from fake_news_pipeline.llm.prompt_builder import PromptBuilder
from fake_news_pipeline.models.pipeline_models import (
    PipelineMetadata,
    PipelineResult,
    make_excerpt,
)
from fake_news_pipeline.models.verdict import Verdict


logger = structlog.get_logger(__name__)


class SummarizerStage:
    """Summarize one text; the summary is the verbatim model output."""

    def __init__(
        self,
        llm_client: OllamaClient,
        prompt_builder: PromptBuilder,
        excerpt_length: int = 200,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.excerpt_length = excerpt_length

    async def summarize(self, text: str, verdict: Verdict) -> PipelineResult:
        start_time = time.perf_counter()
        logger.info("Summarizing text", text_length=len(text), verdict=verdict.kind.value)

        prompt = self.prompt_builder.build_summary_prompt(text, verdict)

        try:
            llm_response = await self.llm_client.chat(prompt)
        except UpstreamCallError as exc:
            logger.error(
                "Summary failed on model call",
                failure=exc.failure.value,
                error=exc.message,
                details=exc.details,
            )
            raise pipeline_error_from_upstream(exc) from exc

        processing_time_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Summary completed",
            summary_length=len(llm_response.content),
            placeholder_used=llm_response.placeholder_used,
        )

        return PipelineResult(
            text=make_excerpt(text, self.excerpt_length),
            is_fake_news=verdict.is_fake_news,
            verdict=verdict.kind,
            summary=llm_response.content,
            metadata=PipelineMetadata(
                model=self.llm_client.model,
                processing_time_ms=processing_time_ms,
            ),
        )
