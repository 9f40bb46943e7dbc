"""
FastAPI API routes and endpoints.

- routes_common.py: Endpoints served by every stage (GET /, /health, /stats)
- routes_gateway.py: POST /analisar (public entry point)
- routes_classifier.py: POST /classify
- routes_summarizer.py: POST /summarize
- dependencies.py: Dependency injection for clients, prompt builder, rate limiter
- models.py: API-specific response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request tracing and security headers
"""

from fake_news_pipeline.api import dependencies, error_handlers, models
from fake_news_pipeline.api.routes_classifier import router as classifier_router
from fake_news_pipeline.api.routes_common import router as common_router
from fake_news_pipeline.api.routes_gateway import router as gateway_router
from fake_news_pipeline.api.routes_summarizer import router as summarizer_router
from fake_news_pipeline.models.enums import StageName

STAGE_ROUTERS = {
    StageName.GATEWAY: gateway_router,
    StageName.CLASSIFIER: classifier_router,
    StageName.SUMMARIZER: summarizer_router,
}

__all__ = [
    "common_router",
    "gateway_router",
    "classifier_router",
    "summarizer_router",
    "STAGE_ROUTERS",
    "dependencies",
    "error_handlers",
    "models",
]
