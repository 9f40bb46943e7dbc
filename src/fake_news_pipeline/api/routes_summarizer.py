"""
Summarizer routes: POST /summarize.
"""

from fastapi import APIRouter, Depends, status

from fake_news_pipeline.api.dependencies import get_summarizer_stage
from fake_news_pipeline.api.models import ErrorResponse
from fake_news_pipeline.models.enums import StageName
from fake_news_pipeline.models.pipeline_models import PipelineResult, SummarizeRequest
from fake_news_pipeline.models.verdict import Verdict
from fake_news_pipeline.monitoring.metrics import pipeline_requests_total
from fake_news_pipeline.stages.summarizer import SummarizerStage

router = APIRouter()


@router.post(
    "/summarize",
    response_model=PipelineResult,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Summarize a classified news text",
    responses={
        400: {"model": ErrorResponse, "description": "Text missing, not a string or out of bounds"},
        429: {"model": ErrorResponse, "description": "Model is rate limiting"},
        500: {"model": ErrorResponse, "description": "Model call failed"},
        503: {"model": ErrorResponse, "description": "Model unreachable or not loaded"},
    },
)
async def summarize_news(
    request: SummarizeRequest,
    summarizer: SummarizerStage = Depends(get_summarizer_stage),
) -> PipelineResult:
    """
    Summarize `text`, using the upstream verdict as a hint.

    `isFakeNews` defaults to false when omitted; null means the classifier
    could not resolve a verdict.
    """
    verdict = Verdict.from_flag(request.is_fake_news)
    result = await summarizer.summarize(request.text, verdict)
    pipeline_requests_total.labels(stage=StageName.SUMMARIZER.value, outcome="success").inc()
    return result
