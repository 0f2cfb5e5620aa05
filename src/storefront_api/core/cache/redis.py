"""Redis-backed cache provider.

Values are stored as JSON strings through the cache serializers, with
``SETEX`` for expiry. Misses are coalesced per process; separate
processes may each run the producer once for the same key.
"""

from typing import Any, TypeVar

import redis.asyncio as redis
import structlog
from redis.asyncio.connection import ConnectionPool

from storefront_api.core.cache.base import Producer, SingleFlight
from storefront_api.core.cache.serializers import deserialize, serialize
from storefront_api.core.constants import REDIS_MAX_CONNECTIONS


T = TypeVar("T")

logger = structlog.get_logger()


def create_redis_client(
    url: str, max_connections: int = REDIS_MAX_CONNECTIONS
) -> redis.Redis:  # type: ignore[type-arg]
    """Create a Redis client with its own connection pool.

    Args:
        url: Redis connection URL (e.g., redis://localhost:6379/0)
        max_connections: Pool size

    Returns:
        Redis client instance
    """
    pool = ConnectionPool.from_url(
        url,
        max_connections=max_connections,
        decode_responses=True,
    )
    return redis.Redis(connection_pool=pool)


class RedisCache:
    """High-level Redis cache interface.

    Args:
        client: Redis client created at startup
        prefix: Prefix for all keys (e.g., "storefront:")
    """

    def __init__(self, client: redis.Redis, prefix: str = "") -> None:  # type: ignore[type-arg]
        self._client = client
        self.prefix = prefix
        self._flights = SingleFlight()

    def _key(self, key: str) -> str:
        """Generate prefixed key."""
        return f"{self.prefix}{key}" if self.prefix else key

    async def get(self, key: str) -> Any | None:
        """Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        data = await self._client.get(self._key(key))
        if data is None:
            return None
        return deserialize(data)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Set a value in cache.

        Args:
            key: Cache key
            value: JSON-serializable value (pydantic models allowed)
            ttl_seconds: TTL in seconds
        """
        await self._client.setex(self._key(key), ttl_seconds, serialize(value))

    async def delete(self, key: str) -> bool:
        """Delete a key from cache.

        Returns:
            True if key was deleted, False if it didn't exist
        """
        result = await self._client.delete(self._key(key))
        return result > 0

    async def remember(self, key: str, ttl_seconds: int, producer: Producer[T]) -> T:
        """Read-through lookup; see CacheProvider.remember."""
        cached = await self.get(key)
        if cached is not None:
            result: T = cached
            return result

        async def produce() -> T:
            # A flight for this key may have stored it while we were reading
            stored = await self.get(key)
            if stored is not None:
                fresh: T = stored
                return fresh
            value = await producer()
            if value is not None:
                await self.set(key, value, ttl_seconds)
            return value

        logger.debug("cache_miss", key=key, backend="redis")
        return await self._flights.do(self._key(key), produce)

    async def ping(self) -> bool:
        return bool(await self._client.ping())

    async def close(self) -> None:
        """Close the client and its connection pool.

        Call this during application shutdown.
        """
        await self._client.aclose()
        await self._client.connection_pool.disconnect()
