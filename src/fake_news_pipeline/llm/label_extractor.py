"""
Label extraction from free-form model output.

The model is asked to answer with one of a fixed set of labels but may
wrap it in prose, change its case, or ignore the instruction entirely.
"""

from typing import Sequence

import structlog

from fake_news_pipeline.models.enums import FAKE_LABEL_MARKER
from fake_news_pipeline.models.verdict import Verdict


logger = structlog.get_logger(__name__)


def extract_label(model_output: str, candidates: Sequence[str]) -> str:
    """
    Find the first candidate label contained in the model output.

    Case-insensitive substring search, candidates tried in the given order.

    Args:
        model_output: Raw model text
        candidates: Candidate labels, in priority order

    Returns:
        The first matching candidate, or `model_output` unchanged when no
        candidate matches.

    Examples:
        >>> extract_label("Esta é uma notícia falsa.", ["notícia verdadeira", "notícia falsa"])
        'notícia falsa'
        >>> extract_label("resposta inesperada", ["notícia verdadeira", "notícia falsa"])
        'resposta inesperada'
    """
    haystack = model_output.lower()
    for candidate in candidates:
        if candidate.lower() in haystack:
            return candidate
    return model_output


def resolve_verdict(model_output: str, candidates: Sequence[str]) -> Verdict:
    """
    Turn model output into a Verdict.

    A matched label containing the fake-news marker yields FAKE_NEWS, any
    other matched label yields TRUE_NEWS. No match yields UNRESOLVED with
    the raw output attached.
    """
    label = extract_label(model_output, candidates)

    if label not in candidates:
        logger.warning(
            "Model output matched no candidate label",
            output_excerpt=model_output[:80],
            candidates=list(candidates),
        )
        return Verdict.unresolved(model_output)

    if FAKE_LABEL_MARKER in label.lower():
        return Verdict.fake_news()
    return Verdict.true_news()
