"""Rate limiting middleware for global request limits.

Applies a per-client-IP limit to every request except health and
documentation paths.
"""

from typing import TYPE_CHECKING, ClassVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from storefront_api.core.errors import RateLimitError, problem_response
from storefront_api.core.logging import get_client_ip


if TYPE_CHECKING:
    from starlette.types import ASGIApp

    from storefront_api.core.rate_limit.backend import SlidingWindowRateLimiter


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware that applies global rate limits to all requests.

    Adds standard rate limit headers to all responses.
    """

    EXCLUDED_PATHS: ClassVar[set[str]] = {
        "/health/live",
        "/health/ready",
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    def __init__(
        self,
        app: "ASGIApp",
        limiter: "SlidingWindowRateLimiter",
        limit: int,
        window: int,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.limit = limit
        self.window = window

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        identifier = f"ip:{get_client_ip(request) or 'unknown'}"
        result = self.limiter.is_allowed(identifier, self.limit, self.window)

        if not result.allowed:
            response = problem_response(
                request,
                RateLimitError(
                    "Rate limit exceeded. Please slow down.",
                    details={"retry_after": result.retry_after},
                ),
            )
            response.headers["X-RateLimit-Limit"] = str(result.limit)
            response.headers["X-RateLimit-Remaining"] = "0"
            response.headers["X-RateLimit-Reset"] = str(result.reset_time)
            response.headers["Retry-After"] = str(result.retry_after)
            return response

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(result.limit)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        response.headers["X-RateLimit-Reset"] = str(result.reset_time)

        return response
