"""
Gateway stage: public entry point of the pipeline.

Rate limiting runs before this class is reached (see api.routes_gateway);
here the raw text is sanitized, checked for minimum length, and forwarded
to the classifier. Downstream failures never leak detail to the caller.
"""

from typing import Any

import structlog

from fake_news_pipeline.exceptions import (
    InvalidInputError,
    StageCallError,
    UpstreamUnavailableError,
)
from fake_news_pipeline.models.pipeline_models import MIN_TEXT_LENGTH, PipelineResult
from fake_news_pipeline.security.sanitizer import sanitize
from fake_news_pipeline.stages.stage_client import ClassifierClient


logger = structlog.get_logger(__name__)


class GatewayStage:
    """Sanitize, validate and forward one public request."""

    def __init__(self, classifier_client: ClassifierClient):
        self.classifier_client = classifier_client

    async def analyze(self, raw_text: Any) -> PipelineResult:
        """
        Run the pipeline for untrusted input.

        Raises:
            InvalidInputError: text missing, or shorter than the minimum after sanitization
            UpstreamUnavailableError: classifier (or anything behind it) failed; always 500
        """
        if raw_text is None or raw_text == "":
            raise InvalidInputError("News text not provided")

        text = sanitize(raw_text)
        if len(text) < MIN_TEXT_LENGTH:
            raise InvalidInputError(
                "News text too short after sanitization",
                details=[{
                    "field": "noticia",
                    "message": f"must have at least {MIN_TEXT_LENGTH} characters after sanitization",
                }],
            )

        if isinstance(raw_text, str) and len(text) != len(raw_text):
            logger.info("Input modified by sanitization", original_length=len(raw_text), sanitized_length=len(text))

        try:
            return await self.classifier_client.classify(text)
        except StageCallError as exc:
            logger.error(
                "Error communicating with classifier",
                failure=exc.failure.value,
                error=exc.message,
                details=exc.details,
            )
            raise UpstreamUnavailableError(
                "Error communicating with the analysis services",
                status_code=500,
            ) from exc
