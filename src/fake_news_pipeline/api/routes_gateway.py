"""
Gateway routes: the public entry point of the pipeline.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, status

from fake_news_pipeline.api.dependencies import enforce_rate_limit, get_gateway_stage
from fake_news_pipeline.api.models import ErrorResponse
from fake_news_pipeline.models.enums import StageName
from fake_news_pipeline.models.pipeline_models import AnalyzeRequest, PipelineResult
from fake_news_pipeline.monitoring.metrics import pipeline_requests_total
from fake_news_pipeline.stages.gateway import GatewayStage

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/analisar",
    response_model=PipelineResult,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Analyse a news text",
    description="""
    Sanitize the submitted text, classify it as true or fake news and
    summarize it.

    Requests are rate limited per client. Downstream failures are reported
    as an opaque 500 whose `id` matches the gateway logs.
    """,
    responses={
        200: {"description": "Analysis completed"},
        400: {"model": ErrorResponse, "description": "Text missing or too short"},
        429: {"model": ErrorResponse, "description": "Too many requests from this client"},
        500: {"model": ErrorResponse, "description": "Analysis services unavailable"},
    },
)
async def analyze_news(
    body: Optional[AnalyzeRequest] = None,
    client_id: str = Depends(enforce_rate_limit),
    gateway: GatewayStage = Depends(get_gateway_stage),
) -> PipelineResult:
    """
    Run the full pipeline for one news text.

    Args:
        body: `{noticia}` payload; any JSON value is accepted and sanitized
        client_id: Caller identity, already checked against the rate limit
        gateway: Gateway stage (injected)
    """
    raw_text = body.noticia if body is not None else None
    logger.info("Analysis requested", client_id=client_id)

    result = await gateway.analyze(raw_text)

    pipeline_requests_total.labels(stage=StageName.GATEWAY.value, outcome="success").inc()
    return result
