"""Process-local TTL cache.

Entries are evicted lazily when read after expiry, in bulk by
``sweep()``, or oldest-written first once ``max_entries`` is reached. Values are kept as Python objects, no serialization.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from storefront_api.core.cache.base import Producer, SingleFlight


T = TypeVar("T")

logger = structlog.get_logger()


@dataclass(slots=True)
class CacheEntry:
    """A cached value and its absolute expiry on the cache clock."""

    value: Any
    expires_at: float


class InMemoryCache:
    """In-memory cache with per-key TTL and coalesced misses.

    Args:
        clock: Monotonic time source in seconds (injectable for tests)
        max_entries: Upper bound on stored entries; when full, the least
            recently written entry is evicted to make room
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = 10_000,
    ) -> None:
        self._clock = clock
        self._max_entries = max_entries
        self._entries: dict[str, CacheEntry] = {}
        self._flights = SingleFlight()

    def __len__(self) -> int:
        return len(self._entries)

    def _lookup(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Any | None:
        entry = self._lookup(key)
        return entry.value if entry else None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        # Re-inserting moves the key to the end of the eviction order
        self._entries.pop(key, None)
        while self._entries and len(self._entries) >= self._max_entries:
            self._evict_oldest()
        self._entries[key] = CacheEntry(value, self._clock() + ttl_seconds)

    def _evict_oldest(self) -> None:
        oldest = next(iter(self._entries))
        del self._entries[oldest]
        logger.debug("cache_evicted", key=oldest, backend="memory")

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def remember(self, key: str, ttl_seconds: int, producer: Producer[T]) -> T:
        entry = self._lookup(key)
        if entry is not None:
            cached: T = entry.value
            return cached

        async def produce() -> T:
            value = await producer()
            if value is not None:
                await self.set(key, value, ttl_seconds)
            return value

        logger.debug("cache_miss", key=key, backend="memory")
        return await self._flights.do(key, produce)

    def sweep(self) -> int:
        """Drop every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self.clear()
