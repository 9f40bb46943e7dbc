"""Monitoring and metrics instrumentation for the fake-news pipeline.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from fake_news_pipeline.monitoring.metrics import (
    downstream_failures_total,
    llm_latency_seconds,
    llm_placeholder_responses_total,
    pipeline_requests_total,
    rate_limited_total,
    verdicts_total,
)

__all__ = [
    "pipeline_requests_total",
    "rate_limited_total",
    "downstream_failures_total",
    "llm_latency_seconds",
    "llm_placeholder_responses_total",
    "verdicts_total",
]
