"""
Wire models exchanged between the pipeline stages.

Field names are snake_case in Python and camelCase on the wire
(e.g. is_fake_news <-> isFakeNews). Models validate by either name and
serialize by alias.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from fake_news_pipeline.models.enums import VerdictKind


MIN_TEXT_LENGTH = 10
MAX_TEXT_LENGTH = 10_000


def make_excerpt(text: str, length: int = 200) -> str:
    """First `length` characters of text, with an ellipsis if it was cut."""
    return text[:length] + ("..." if len(text) > length else "")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AnalyzeRequest(BaseModel):
    """
    Public gateway request.

    `noticia` is intentionally untyped: the gateway sanitizes whatever it
    receives (non-strings sanitize to an empty string) and validates after.
    """

    noticia: Any = Field(default=None, description="Raw, untrusted news text")


class ClassifyRequest(BaseModel):
    """Classifier stage request."""

    text: StrictStr = Field(
        ...,
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_TEXT_LENGTH,
        description="Sanitized news text",
    )


class SummarizeRequest(BaseModel):
    """Summarizer stage request."""

    model_config = ConfigDict(populate_by_name=True)

    text: StrictStr = Field(
        ...,
        min_length=MIN_TEXT_LENGTH,
        max_length=MAX_TEXT_LENGTH,
        description="Sanitized news text",
    )
    is_fake_news: Optional[StrictBool] = Field(
        default=False,
        alias="isFakeNews",
        description="Upstream verdict flag (null = unresolved)",
    )


class PipelineMetadata(BaseModel):
    """Processing metadata attached by the stage that built the result."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    model: str = Field(..., description="Model name used")
    timestamp: datetime = Field(default_factory=utc_now, description="UTC timestamp")
    processing_time_ms: int = Field(
        ..., ge=0, alias="processingTime", description="Stage processing time in milliseconds"
    )


class PipelineResult(BaseModel):
    """Terminal artifact returned to the caller."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., description="Excerpt of the analysed text")
    is_fake_news: Optional[bool] = Field(
        ..., alias="isFakeNews", description="Verdict flag (null = unresolved)"
    )
    verdict: VerdictKind = Field(..., description="Verdict tag")
    summary: str = Field(..., description="Model summary, verbatim")
    metadata: PipelineMetadata
