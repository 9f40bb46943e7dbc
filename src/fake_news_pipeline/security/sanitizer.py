"""
Input sanitization for untrusted news text.

Strips script blocks, angle brackets and `javascript:` markers, then caps
the length. The result is what every downstream stage receives.
"""

import re
from typing import Any

import structlog


logger = structlog.get_logger(__name__)

MAX_SANITIZED_LENGTH = 10_000

# <script ...> ... </script>, non-greedy, case-insensitive, across newlines
SCRIPT_BLOCK_PATTERN = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)
ANGLE_BRACKET_PATTERN = re.compile(r"[<>]")
JAVASCRIPT_SCHEME_PATTERN = re.compile(r"javascript:", re.IGNORECASE)


def sanitize(value: Any, max_length: int = MAX_SANITIZED_LENGTH) -> str:
    """
    Sanitize raw input text.

    Steps:
    1. Remove `<script>...</script>` blocks
    2. Remove every remaining `<` and `>`
    3. Remove `javascript:` markers, repeatedly, so that removals cannot
       assemble a new marker (keeps the function idempotent)
    4. Truncate to `max_length` characters

    Args:
        value: Raw input; anything that is not a str yields ""
        max_length: Maximum length of the result

    Returns:
        Sanitized text

    Examples:
        >>> sanitize("<script>alert(1)</script>hello")
        'hello'
        >>> sanitize("JaVaScRiPt:void(0)")
        'void(0)'
    """
    if not isinstance(value, str):
        return ""

    text = SCRIPT_BLOCK_PATTERN.sub("", value)
    text = ANGLE_BRACKET_PATTERN.sub("", text)

    while True:
        text, removed = JAVASCRIPT_SCHEME_PATTERN.subn("", text)
        if not removed:
            break

    if len(text) > max_length:
        logger.debug("Sanitized text truncated", original_length=len(text), max_length=max_length)
        text = text[:max_length]

    return text
