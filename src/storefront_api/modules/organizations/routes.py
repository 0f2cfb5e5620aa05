"""Storefront-facing organization endpoints."""

from fastapi import APIRouter

from storefront_api.core.tenancy import RequiredTenant
from storefront_api.modules.organizations.schemas import StorefrontTenantResponse


router = APIRouter(prefix="/storefront", tags=["storefront"])


@router.get(
    "/tenant",
    response_model=StorefrontTenantResponse,
    summary="Current tenant",
    description="Returns the organization the calling storefront belongs to.",
)
async def get_current_tenant(tenant: RequiredTenant) -> StorefrontTenantResponse:
    return StorefrontTenantResponse.model_validate(tenant)
