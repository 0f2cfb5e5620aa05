"""Rate limiting module.

Provides:
- SlidingWindowRateLimiter: in-process sliding window limiter
- RateLimitMiddleware: global per-IP rate limiting
"""

from storefront_api.core.rate_limit.backend import RateLimitResult, SlidingWindowRateLimiter
from storefront_api.core.rate_limit.middleware import RateLimitMiddleware


__all__ = [
    "RateLimitMiddleware",
    "RateLimitResult",
    "SlidingWindowRateLimiter",
]
