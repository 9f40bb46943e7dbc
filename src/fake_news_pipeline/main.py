"""
FastAPI application entry point for the fake-news pipeline.

One process serves one stage; `create_app` builds the app for the stage
named by the STAGE setting (or passed explicitly, as the tests do).
"""

import time
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from fake_news_pipeline.api import STAGE_ROUTERS, common_router
from fake_news_pipeline.api.error_handlers import EXCEPTION_HANDLERS
from fake_news_pipeline.api.middleware import RequestTracingMiddleware, SecurityHeadersMiddleware
from fake_news_pipeline.config import Settings, settings as default_settings
from fake_news_pipeline.llm.ollama_client import OllamaClient
from fake_news_pipeline.logging_config import configure_logging
from fake_news_pipeline.models.enums import StageName

logger = structlog.get_logger(__name__)

# Clients created lazily by the dependency providers, closed on shutdown
CLOSEABLE_STATE = ("llm_client", "classifier_client", "summarizer_client")

STAGE_DESCRIPTIONS = {
    StageName.GATEWAY: "Public entry point: sanitizes, rate limits and forwards news texts",
    StageName.CLASSIFIER: "Classifies news texts as true or fake with a local LLM",
    StageName.SUMMARIZER: "Summarizes classified news texts with a local LLM",
}


def create_app(stage: Optional[StageName] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI app of one pipeline stage.

    Args:
        stage: Stage to serve (default: settings.STAGE)
        settings: Application settings (default: the environment-loaded settings)
    """
    settings = settings or default_settings
    stage = StageName(stage or settings.STAGE)

    app = FastAPI(
        title=f"{settings.APP_NAME} ({stage.value})",
        description=STAGE_DESCRIPTIONS[stage],
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.stage = stage
    app.state.started_at = time.monotonic()

    # Middleware added last runs first: tracing wraps everything
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTracingMiddleware, default_timeout=settings.DOWNSTREAM_TIMEOUT)

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(common_router, tags=["service"])
    app.include_router(STAGE_ROUTERS[stage], tags=[stage.value])

    @app.on_event("startup")
    async def startup():
        """Application startup - log configuration and check the model server."""
        logger.info(
            "Application startup",
            stage=stage.value,
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
            port=settings.port,
        )

        if stage is StageName.GATEWAY:
            logger.info("Classifier endpoint", url=settings.CLASSIFIER_URL)
        else:
            logger.info(
                "Model endpoint",
                ollama_base_url=settings.OLLAMA_BASE_URL,
                model=settings.OLLAMA_MODEL,
            )
            async with OllamaClient(settings.OLLAMA_BASE_URL, settings.OLLAMA_MODEL) as probe:
                if await probe.health_check():
                    logger.info("Ollama connection successful")
                else:
                    logger.warning("Ollama not reachable at startup, requests will fail until it is")

        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown():
        """Application shutdown - close pooled HTTP clients."""
        logger.info("Application shutdown")
        for name in CLOSEABLE_STATE:
            client = getattr(app.state, name, None)
            if client is not None:
                await client.close()
        logger.info("Application shutdown complete")

    if settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)

    return app


# Configure structured logging, then build the app for the configured stage
configure_logging(default_settings.LOG_LEVEL, default_settings.ENVIRONMENT, default_settings.STAGE.value)
app = create_app()


def run() -> None:
    """Console entry point: serve the configured stage with uvicorn."""
    import uvicorn

    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
