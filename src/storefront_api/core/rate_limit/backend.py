"""In-memory sliding window rate limiter.

Keeps the request timestamps of each identifier inside the window.
State is per process; run one limiter per worker.
"""

import math
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_time: int
    retry_after: int | None = None


class SlidingWindowRateLimiter:
    """Sliding window rate limiter backed by a dict of deques.

    Each allowed request appends its timestamp; timestamps older than the
    window are evicted before counting. Identifiers with no requests left
    in their window are dropped by ``sweep()``.

    Args:
        clock: Time source in seconds (injectable for tests)
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}

    def __len__(self) -> int:
        return len(self._hits)

    def _build_key(self, identifier: str, endpoint: str | None = None) -> str:
        if endpoint:
            endpoint_key = endpoint.replace("/", "_").strip("_")
            return f"{identifier}:{endpoint_key}"
        return identifier

    @staticmethod
    def _evict(hits: deque[float], window_start: float) -> None:
        while hits and hits[0] <= window_start:
            hits.popleft()

    def is_allowed(
        self,
        identifier: str,
        limit: int,
        window: int,
        endpoint: str | None = None,
    ) -> RateLimitResult:
        """Check if a request is allowed and record it when it is.

        Args:
            identifier: Client IP or other caller key
            limit: Maximum number of requests allowed in the window
            window: Time window in seconds
            endpoint: Optional endpoint for per-route limits

        Returns:
            RateLimitResult with allowed status and metadata
        """
        key = self._build_key(identifier, endpoint)
        now = self._clock()
        hits = self._hits.setdefault(key, deque())
        self._evict(hits, now - window)

        if len(hits) >= limit:
            oldest = hits[0] if hits else now
            retry_after = max(1, math.ceil(oldest + window - now))
            return RateLimitResult(
                allowed=False,
                limit=limit,
                remaining=0,
                reset_time=int(oldest + window),
                retry_after=retry_after,
            )

        hits.append(now)
        return RateLimitResult(
            allowed=True,
            limit=limit,
            remaining=limit - len(hits),
            reset_time=int(hits[0] + window),
        )

    def reset(self, identifier: str, endpoint: str | None = None) -> bool:
        """Reset rate limit for an identifier.

        Returns:
            True if the identifier had recorded requests
        """
        return self._hits.pop(self._build_key(identifier, endpoint), None) is not None

    def sweep(self, window: int) -> int:
        """Drop identifiers whose requests all fell out of the window.

        Returns:
            Number of identifiers removed
        """
        window_start = self._clock() - window
        stale = []
        for key, hits in self._hits.items():
            self._evict(hits, window_start)
            if not hits:
                stale.append(key)
        for key in stale:
            del self._hits[key]
        return len(stale)
