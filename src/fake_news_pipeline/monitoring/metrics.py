"""Custom Prometheus metrics for the fake-news pipeline.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- downstream_failures_total (model or stage unreachable)
- llm_placeholder_responses_total (model replying without content)
- verdicts_total{verdict="unresolved"} (model ignoring the label instructions)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

pipeline_requests_total = Counter(
    "pipeline_requests_total",
    "Total pipeline requests by stage and outcome",
    ["stage", "outcome"],
)
"""
Requests handled by each stage.

Labels:
- stage: gateway, classifier, summarizer
- outcome: success, or the ErrorKind value of the failure
"""

rate_limited_total = Counter(
    "rate_limited_total",
    "Requests rejected by the sliding-window rate limiter",
    ["stage"],
)

# === Downstream Metrics ===

downstream_failures_total = Counter(
    "downstream_failures_total",
    "Failed outbound calls by target and failure variant",
    ["target", "failure"],
)
"""
Outbound call failures.

Labels:
- target: ollama, classifier, summarizer
- failure: timeout, connection_refused, rate_limited, model_unavailable,
  malformed_response, other
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM chat latency in seconds",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)
"""
LLM chat latency histogram.

Buckets optimized for small local models (0.5s to 120s).

Alert thresholds:
- WARN: p95 > 15s
- CRITICAL: p95 > 30s (the default downstream timeout)
"""

llm_placeholder_responses_total = Counter(
    "llm_placeholder_responses_total",
    "Model replies without content, replaced by the placeholder text",
    ["model"],
)

# === Verdict Metrics ===

verdicts_total = Counter(
    "verdicts_total",
    "Classifier verdicts by tag",
    ["verdict"],
)
"""
Verdict distribution.

Labels:
- verdict: true, fake, unresolved

A growing unresolved share indicates the model stopped following the
label instructions (prompt or model drift).
"""
