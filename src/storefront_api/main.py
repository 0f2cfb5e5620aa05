"""FastAPI application factory."""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront_api.api import api_router
from storefront_api.config import settings
from storefront_api.core.cache import InMemoryCache, build_cache
from storefront_api.core.database import async_session_factory, dispose_engine
from storefront_api.core.errors import register_exception_handlers
from storefront_api.core.logging import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)
from storefront_api.core.rate_limit import RateLimitMiddleware, SlidingWindowRateLimiter
from storefront_api.core.tenancy import TenantContextMiddleware, TenantResolver
from storefront_api.modules.organizations import OrganizationLookup


logger = structlog.get_logger()

SWEEP_INTERVAL_SECONDS = 60


def build_tenant_resolver() -> TenantResolver:
    """Compose the tenant resolver from configuration."""
    return TenantResolver(
        cache=build_cache(settings.tenant_cache_backend, str(settings.redis_url)),
        lookup=OrganizationLookup(async_session_factory),
        ttl_seconds=settings.tenant_cache_ttl,
        cache_misses=settings.tenant_cache_misses,
    )


async def _sweep_expired(app: FastAPI) -> None:
    """Periodically drop expired in-process cache and rate limit entries."""
    while True:
        await asyncio.sleep(SWEEP_INTERVAL_SECONDS)
        cache = app.state.cache
        if isinstance(cache, InMemoryCache):
            cache.sweep()
        app.state.rate_limiter.sweep(settings.rate_limit_window)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Handles startup and shutdown events.
    """
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
        tenant_cache_backend=settings.tenant_cache_backend,
    )
    sweeper = asyncio.create_task(_sweep_expired(app))

    yield

    logger.info("application_shutdown")

    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper

    await app.state.cache.close()
    logger.info("cache_closed")

    await dispose_engine()
    logger.info("database_engine_disposed")


def create_app(
    tenant_resolver: TenantResolver | None = None,
    rate_limiter: SlidingWindowRateLimiter | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        tenant_resolver: Resolver to use instead of the configured one
        rate_limiter: Limiter to use instead of a fresh one

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging(settings.log_level, json_logs=settings.is_production)

    if tenant_resolver is None:
        tenant_resolver = build_tenant_resolver()
    if rate_limiter is None:
        rate_limiter = SlidingWindowRateLimiter()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant storefront and admin API",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    app.state.cache = tenant_resolver.cache
    app.state.tenant_resolver = tenant_resolver
    app.state.rate_limiter = rate_limiter

    # Middleware added last runs first
    app.add_middleware(
        TenantContextMiddleware,
        resolver=tenant_resolver,
        exclude_paths=settings.tenant_exclude_paths,
    )
    app.add_middleware(RequestLoggingMiddleware)

    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            limiter=rate_limiter,
            limit=settings.rate_limit_requests,
            window=settings.rate_limit_window,
        )

    app.add_middleware(RequestIdMiddleware)

    cors_origins = settings.cors_origins
    if settings.is_development and not cors_origins:
        cors_origins = ["http://localhost:3000", "http://localhost:3002"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    register_exception_handlers(app)

    app.include_router(api_router)

    return app
