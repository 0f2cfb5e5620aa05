"""Root API router: health probes plus the versioned module routers."""

from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text

from storefront_api.api.dependencies import AppCache, DBSession
from storefront_api.config import settings
from storefront_api.modules import discover_modules


logger = structlog.get_logger()


class HealthResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    """Overall status plus one entry per dependency ("ok" or the failure)."""

    status: str
    checks: dict[str, str]


async def _run_check(name: str, probe: Callable[[], Awaitable[bool]]) -> str:
    try:
        return "ok" if await probe() else "unreachable"
    except Exception as e:
        logger.warning("readiness_check_failed", check=name, error=str(e))
        return str(e)


# Probes live at the root, outside /api/v1, and skip tenant resolution
health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns 200 while the process is serving requests.",
)
async def liveness() -> HealthResponse:
    return HealthResponse(status="alive")


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Checks the organization database and the tenant cache.",
)
async def readiness(db: DBSession, cache: AppCache) -> JSONResponse:
    async def database() -> bool:
        await db.execute(text("SELECT 1"))
        return True

    checks = {
        "database": await _run_check("database", database),
        "cache": await _run_check("cache", cache.ping),
    }
    ready = all(result == "ok" for result in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ReadinessResponse(
            status="ready" if ready else "degraded", checks=checks
        ).model_dump(),
    )


@health_router.get("/info", summary="Application info")
async def info() -> dict[str, Any]:
    return {
        "app": settings.app_name,
        "environment": settings.environment,
        "debug": settings.debug,
        "tenant_cache_backend": settings.tenant_cache_backend,
    }


v1_router = APIRouter(prefix="/api/v1")
for module_router in discover_modules():
    v1_router.include_router(module_router)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(v1_router)
