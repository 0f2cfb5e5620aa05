"""Slug to organization resolution with a read-through cache.

Cache entries live under ``tenant:slug:{slug}``. A slug with no matching
organization is cached as a miss marker (unless ``cache_misses`` is off)
so repeated requests for an unknown host do not each reach the store.
"""

from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from storefront_api.core.cache import CacheProvider
from storefront_api.core.constants import (
    TENANT_CACHE_KEY_PREFIX,
    TENANT_CACHE_TTL_SECONDS,
)
from storefront_api.core.tenancy.context import TenantContext, TenantRecord


logger = structlog.get_logger()

# Stored in place of a record when the store has no organization for a slug
TENANT_MISS_MARKER = "__missing__"

TenantLookup = Callable[[str], Awaitable[TenantRecord | None]]


class TenantResolver:
    """Resolve tenant slugs to organization records.

    Constructed once at startup and handed to the tenant middleware.

    Args:
        cache: Cache provider shared by all requests
        lookup: Store query returning the organization for an exact slug
        ttl_seconds: Lifetime of cached results, hits and misses alike
        cache_misses: Cache "no such organization" results as well

    Example:
        resolver = TenantResolver(InMemoryCache(), OrganizationLookup(session_factory))
        tenant = await resolver.resolve("acme")
    """

    def __init__(
        self,
        cache: CacheProvider,
        lookup: TenantLookup,
        ttl_seconds: int = TENANT_CACHE_TTL_SECONDS,
        cache_misses: bool = True,
    ) -> None:
        self.cache = cache
        self._lookup = lookup
        self.ttl_seconds = ttl_seconds
        self.cache_misses = cache_misses

    @staticmethod
    def cache_key(slug: str) -> str:
        return f"{TENANT_CACHE_KEY_PREFIX}{slug}"

    async def resolve(self, slug: str) -> TenantRecord | None:
        """Return the organization for a slug, or None.

        Store errors propagate to the caller; nothing is cached for them.
        """

        async def load() -> TenantRecord | str | None:
            record = await self._lookup(slug)
            if record is None:
                logger.info("tenant_not_found", slug=slug)
                return TENANT_MISS_MARKER if self.cache_misses else None
            logger.info("tenant_loaded", slug=slug, tenant_id=str(record.id))
            return record

        value = await self.cache.remember(self.cache_key(slug), self.ttl_seconds, load)
        return self._to_record(value)

    async def resolve_context(self, slug: str | None) -> TenantContext:
        """Build the request context for an extracted slug."""
        if slug is None:
            return TenantContext()
        return TenantContext(slug=slug, tenant=await self.resolve(slug))

    async def invalidate(self, slug: str) -> bool:
        """Forget the cached result for a slug, e.g. after it was renamed."""
        return await self.cache.delete(self.cache_key(slug))

    @staticmethod
    def _to_record(value: Any) -> TenantRecord | None:
        if value is None or value == TENANT_MISS_MARKER:
            return None
        if isinstance(value, TenantRecord):
            return value
        # Serializing caches hand back the model_dump dict
        return TenantRecord.model_validate(value)
