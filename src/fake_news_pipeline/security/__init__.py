"""
Request security policies applied by the gateway.

- sanitizer: strips markup and script fragments, caps text length
- rate_limiter: sliding-window request counter per client identity
"""

from fake_news_pipeline.security.rate_limiter import SlidingWindowRateLimiter
from fake_news_pipeline.security.sanitizer import MAX_SANITIZED_LENGTH, sanitize

__all__ = [
    "SlidingWindowRateLimiter",
    "sanitize",
    "MAX_SANITIZED_LENGTH",
]
