"""
Classifier routes: POST /classify.
"""

from fastapi import APIRouter, Depends, status

from fake_news_pipeline.api.dependencies import get_classifier_stage
from fake_news_pipeline.api.models import ErrorResponse
from fake_news_pipeline.models.enums import StageName
from fake_news_pipeline.models.pipeline_models import ClassifyRequest, PipelineResult
from fake_news_pipeline.monitoring.metrics import pipeline_requests_total
from fake_news_pipeline.stages.classifier import ClassifierStage

router = APIRouter()


@router.post(
    "/classify",
    response_model=PipelineResult,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Classify a news text",
    description="""
    Ask the model whether the text is true or fake news, then forward the
    text and verdict to the summarizer.

    The result carries the classifier's own metadata.
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Text missing, not a string or out of bounds"},
        429: {"model": ErrorResponse, "description": "Model is rate limiting"},
        500: {"model": ErrorResponse, "description": "Model or summarizer failed"},
        503: {"model": ErrorResponse, "description": "Model unreachable or not loaded"},
    },
)
async def classify_news(
    request: ClassifyRequest,
    classifier: ClassifierStage = Depends(get_classifier_stage),
) -> PipelineResult:
    result = await classifier.classify(request.text)
    pipeline_requests_total.labels(stage=StageName.CLASSIFIER.value, outcome="success").inc()
    return result
