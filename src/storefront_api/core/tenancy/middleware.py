"""Tenant context middleware.

Resolves the tenant for every request from its headers and attaches the
result as ``request.state.tenant_context`` for downstream handlers.
"""

from typing import TYPE_CHECKING

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from storefront_api.core.errors import ServiceUnavailableError, problem_response
from storefront_api.core.tenancy.context import TenantContext
from storefront_api.core.tenancy.extractors import slug_from_request


if TYPE_CHECKING:
    from starlette.types import ASGIApp

    from storefront_api.core.tenancy.resolver import TenantResolver


logger = structlog.get_logger()


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Middleware that injects tenant context into requests.

    A request whose host carries no tenant, or whose slug matches no
    organization, continues with an empty context; endpoints that need a
    tenant reject it through the ``RequiredTenant`` dependency. A store
    failure during lookup fails the request with 503.

    Attributes:
        resolver: Tenant resolver built at startup
        exclude_paths: Path prefixes that skip tenant resolution
    """

    def __init__(
        self,
        app: "ASGIApp",
        resolver: "TenantResolver",
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.resolver = resolver
        self.exclude_paths = exclude_paths or []

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            request.state.tenant_context = TenantContext()
            return await call_next(request)

        slug = slug_from_request(request.headers)

        try:
            context = await self.resolver.resolve_context(slug)
        except Exception as exc:
            logger.exception("tenant_lookup_failed", slug=slug, error=str(exc))
            return problem_response(
                request,
                ServiceUnavailableError(
                    "Tenant lookup failed", details={"tenant_slug": slug}
                ),
            )

        request.state.tenant_context = context
        request.state.tenant_id = context.tenant_id

        if slug is not None:
            structlog.contextvars.bind_contextvars(tenant_slug=slug)
        if context.tenant_id is not None:
            structlog.contextvars.bind_contextvars(tenant_id=str(context.tenant_id))

        return await call_next(request)
