"""Cache module.

Provides:
- The CacheProvider contract with read-through ``remember``
- An in-process TTL cache and a Redis-backed cache
- Serialization utilities for cache values
"""

from storefront_api.core.cache.base import CacheProvider, SingleFlight
from storefront_api.core.cache.memory import InMemoryCache
from storefront_api.core.cache.redis import RedisCache, create_redis_client
from storefront_api.core.cache.serializers import deserialize, serialize


def build_cache(backend: str, redis_url: str) -> CacheProvider:
    """Construct the cache selected by configuration.

    Args:
        backend: "memory" or "redis"
        redis_url: Used when backend is "redis"
    """
    if backend == "redis":
        return RedisCache(create_redis_client(redis_url), prefix="storefront:")
    if backend == "memory":
        return InMemoryCache()
    raise ValueError(f"Unknown cache backend: {backend!r}")


__all__ = [
    "CacheProvider",
    "InMemoryCache",
    "RedisCache",
    "SingleFlight",
    "build_cache",
    "create_redis_client",
    "deserialize",
    "serialize",
]
