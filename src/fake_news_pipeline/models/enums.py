"""
Enumerations for the pipeline data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class StageName(str, Enum):
    """The three network-reachable pipeline stages."""

    GATEWAY = "gateway"
    CLASSIFIER = "classifier"
    SUMMARIZER = "summarizer"


class NewsLabel(str, Enum):
    """
    Candidate labels the classifier asks the model to answer with.

    Order matters: label extraction searches them in declaration order.
    """

    TRUE_NEWS = "notícia verdadeira"
    FAKE_NEWS = "notícia falsa"


class VerdictKind(str, Enum):
    """
    Tag of a resolved (or unresolved) verdict.

    UNRESOLVED is used when the model output matched none of the labels.
    """

    TRUE_NEWS = "true"
    FAKE_NEWS = "fake"
    UNRESOLVED = "unresolved"


class ErrorKind(str, Enum):
    """Error taxonomy exposed to callers in the `error` field."""

    INVALID_INPUT = "invalid_input"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    INTERNAL_UNHANDLED = "internal_unhandled"
    ROUTE_NOT_FOUND = "route_not_found"


class UpstreamFailure(str, Enum):
    """
    Structured failure variant of an outbound call (model or stage).

    Status mapping switches on this value, never on error message text.
    """

    TIMEOUT = "timeout"
    CONNECTION_REFUSED = "connection_refused"
    RATE_LIMITED = "rate_limited"
    MODEL_UNAVAILABLE = "model_unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    OTHER = "other"


# Fixed candidate set for classification, in search order
CANDIDATE_LABELS: tuple[str, ...] = tuple(label.value for label in NewsLabel)

# Lexical marker identifying the fake-news label
FAKE_LABEL_MARKER = "falsa"
