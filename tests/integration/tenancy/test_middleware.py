"""Integration tests for tenant resolution over HTTP."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from storefront_api.config import settings
from storefront_api.core.rate_limit import SlidingWindowRateLimiter
from storefront_api.core.tenancy import TenantRecord, TenantResolver
from storefront_api.main import create_app
from tests.fakes import FakeOrganizationStore


pytestmark = pytest.mark.integration

TENANT_URL = "/api/v1/storefront/tenant"


@pytest.fixture
async def storefront_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client addressing the API through the "acme" tenant host."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://acme.storefront.com",
    ) as client:
        yield client


class TestTenantEndpoint:
    """Tests for GET /api/v1/storefront/tenant."""

    async def test_resolves_tenant_from_host(
        self, storefront_client: AsyncClient, acme: TenantRecord
    ):
        response = await storefront_client.get(TENANT_URL)

        assert response.status_code == 200
        assert response.json() == {
            "id": str(acme.id),
            "slug": "acme",
            "name": "Acme Outfitters",
            "logo": None,
        }

    async def test_host_port_is_ignored(self, app: FastAPI):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://acme.storefront.com:8080",
        ) as client:
            response = await client.get(TENANT_URL)

        assert response.status_code == 200
        assert response.json()["slug"] == "acme"

    async def test_referer_takes_precedence_over_host(
        self, client: AsyncClient, store: FakeOrganizationStore, acme: TenantRecord
    ):
        store.add(acme.model_copy(update={"slug": "tenanta", "name": "Tenant A"}))

        response = await client.get(
            TENANT_URL,
            headers={
                "Host": "api.backend.com",
                "Referer": "https://tenantA.storefront.com/products",
            },
        )

        assert response.status_code == 200
        assert response.json()["slug"] == "tenanta"
        assert store.queries == ["tenanta"]

    async def test_malformed_referer_falls_back_to_host(self, storefront_client: AsyncClient):
        response = await storefront_client.get(
            TENANT_URL,
            headers={"Referer": "not a url"},
        )

        assert response.status_code == 200
        assert response.json()["slug"] == "acme"

    async def test_no_tenant_on_localhost(
        self, client: AsyncClient, store: FakeOrganizationStore
    ):
        response = await client.get(TENANT_URL)

        assert response.status_code == 400
        body = response.json()
        assert body["type"].endswith("/errors/tenant_required")
        assert body["instance"] == TENANT_URL
        assert store.queries == []

    async def test_unknown_tenant(self, app: FastAPI):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://nobody.storefront.com",
        ) as client:
            response = await client.get(TENANT_URL)

        assert response.status_code == 404
        body = response.json()
        assert body["type"].endswith("/errors/tenant_not_found")
        assert body["resource_id"] == "nobody"

    async def test_store_failure_returns_503(
        self, storefront_client: AsyncClient, store: FakeOrganizationStore
    ):
        store.error = ConnectionError("database is down")

        response = await storefront_client.get(TENANT_URL)

        assert response.status_code == 503
        body = response.json()
        assert body["type"].endswith("/errors/service_unavailable")
        assert body["tenant_slug"] == "acme"

    async def test_repeated_requests_hit_store_once(
        self, storefront_client: AsyncClient, store: FakeOrganizationStore
    ):
        for _ in range(3):
            response = await storefront_client.get(TENANT_URL)
            assert response.status_code == 200

        assert store.queries == ["acme"]


class TestAmbientMiddleware:
    """Request id, rate limiting and excluded paths around tenant resolution."""

    async def test_health_skips_tenant_lookup(
        self, storefront_client: AsyncClient, store: FakeOrganizationStore
    ):
        store.error = ConnectionError("database is down")

        response = await storefront_client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}
        assert store.queries == []

    async def test_request_id_header(self, storefront_client: AsyncClient):
        response = await storefront_client.get(TENANT_URL)

        assert response.headers["X-Request-ID"]

    async def test_request_id_is_propagated(self, storefront_client: AsyncClient):
        response = await storefront_client.get(
            TENANT_URL, headers={"X-Request-ID": "req-123"}
        )

        assert response.headers["X-Request-ID"] == "req-123"

    async def test_rate_limit_headers(self, storefront_client: AsyncClient):
        response = await storefront_client.get(TENANT_URL)

        assert response.headers["X-RateLimit-Limit"] == str(settings.rate_limit_requests)
        assert "X-RateLimit-Remaining" in response.headers

    async def test_rate_limit_exceeded(
        self, monkeypatch: pytest.MonkeyPatch, resolver: TenantResolver
    ):
        monkeypatch.setattr(settings, "rate_limit_enabled", True)
        monkeypatch.setattr(settings, "rate_limit_requests", 2)
        app = create_app(tenant_resolver=resolver, rate_limiter=SlidingWindowRateLimiter())

        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://acme.storefront.com",
        ) as client:
            statuses = [(await client.get(TENANT_URL)).status_code for _ in range(3)]
            response = await client.get(TENANT_URL)

        assert statuses == [200, 200, 429]
        assert response.status_code == 429
        assert response.json()["type"].endswith("/errors/rate_limit_exceeded")
        assert int(response.headers["Retry-After"]) >= 1
