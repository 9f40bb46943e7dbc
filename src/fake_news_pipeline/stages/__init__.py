"""
Pipeline stages (Gateway -> Classifier -> Summarizer).

Each stage class holds the orchestration logic of one network service;
the FastAPI routes in `fake_news_pipeline.api` only bind HTTP to them.
"""

from fake_news_pipeline.stages.classifier import ClassifierStage
from fake_news_pipeline.stages.gateway import GatewayStage
from fake_news_pipeline.stages.stage_client import (
    ClassifierClient,
    StageClient,
    SummarizerClient,
)
from fake_news_pipeline.stages.summarizer import SummarizerStage

__all__ = [
    "GatewayStage",
    "ClassifierStage",
    "SummarizerStage",
    "StageClient",
    "ClassifierClient",
    "SummarizerClient",
]
