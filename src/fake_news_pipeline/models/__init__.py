"""
Pydantic data models for the fake-news pipeline.

Includes:
- Enums (StageName, NewsLabel, VerdictKind, ErrorKind, UpstreamFailure)
- Verdict (tagged classification outcome)
- Wire models (AnalyzeRequest, ClassifyRequest, SummarizeRequest, PipelineResult)
- LLM models (LLMGenerationResponse)
"""

from fake_news_pipeline.models.enums import (
    CANDIDATE_LABELS,
    FAKE_LABEL_MARKER,
    ErrorKind,
    NewsLabel,
    StageName,
    UpstreamFailure,
    VerdictKind,
)
from fake_news_pipeline.models.llm_models import LLMGenerationResponse
from fake_news_pipeline.models.pipeline_models import (
    MAX_TEXT_LENGTH,
    MIN_TEXT_LENGTH,
    AnalyzeRequest,
    ClassifyRequest,
    PipelineMetadata,
    PipelineResult,
    SummarizeRequest,
    make_excerpt,
)
from fake_news_pipeline.models.verdict import Verdict

__all__ = [
    # Enums
    "StageName",
    "NewsLabel",
    "VerdictKind",
    "ErrorKind",
    "UpstreamFailure",
    "CANDIDATE_LABELS",
    "FAKE_LABEL_MARKER",
    # Verdict
    "Verdict",
    # Wire models
    "AnalyzeRequest",
    "ClassifyRequest",
    "SummarizeRequest",
    "PipelineMetadata",
    "PipelineResult",
    "MIN_TEXT_LENGTH",
    "MAX_TEXT_LENGTH",
    "make_excerpt",
    # LLM models
    "LLMGenerationResponse",
]
