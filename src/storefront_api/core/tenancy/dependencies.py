"""FastAPI dependencies exposing the request's tenant."""

from typing import Annotated

from fastapi import Depends, Request

from storefront_api.core.errors import TenantNotFoundError, TenantRequiredError
from storefront_api.core.tenancy.context import TenantContext, TenantRecord


def get_tenant_context(request: Request) -> TenantContext:
    """Tenant context set by TenantContextMiddleware (empty if it did not run)."""
    context: TenantContext | None = getattr(request.state, "tenant_context", None)
    return context or TenantContext()


CurrentTenantContext = Annotated[TenantContext, Depends(get_tenant_context)]


def get_optional_tenant(context: CurrentTenantContext) -> TenantRecord | None:
    return context.tenant


def get_required_tenant(context: CurrentTenantContext) -> TenantRecord:
    """Require a resolved tenant.

    Raises:
        TenantRequiredError: The request host carries no tenant slug
        TenantNotFoundError: No organization matches the slug
    """
    if context.slug is None:
        raise TenantRequiredError()
    if context.tenant is None:
        raise TenantNotFoundError(context.slug)
    return context.tenant


OptionalTenant = Annotated[TenantRecord | None, Depends(get_optional_tenant)]
RequiredTenant = Annotated[TenantRecord, Depends(get_required_tenant)]
