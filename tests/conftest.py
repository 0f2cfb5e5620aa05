"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from storefront_api.core.cache import InMemoryCache
from storefront_api.core.rate_limit import SlidingWindowRateLimiter
from storefront_api.core.tenancy import TenantRecord, TenantResolver
from storefront_api.main import create_app
from tests.factories.organization import TenantRecordFactory
from tests.fakes import FakeClock, FakeOrganizationStore


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryCache:
    return InMemoryCache(clock=clock)


@pytest.fixture
def acme() -> TenantRecord:
    """The "acme" organization."""
    return TenantRecordFactory.build(slug="acme", name="Acme Outfitters")


@pytest.fixture
def store(acme: TenantRecord) -> FakeOrganizationStore:
    return FakeOrganizationStore(acme)


@pytest.fixture
def resolver(cache: InMemoryCache, store: FakeOrganizationStore) -> TenantResolver:
    return TenantResolver(cache, store, ttl_seconds=300)


@pytest.fixture
def app(resolver: TenantResolver) -> FastAPI:
    """Create test application instance with an in-memory tenant store."""
    return create_app(tenant_resolver=resolver, rate_limiter=SlidingWindowRateLimiter())


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client addressing the API on its own, tenant-less host."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://localhost:8000",
    ) as client:
        yield client


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
