"""Organizations module - tenants of the platform."""

from storefront_api.modules.organizations.models import Organization
from storefront_api.modules.organizations.repos import (
    OrganizationLookup,
    OrganizationRepository,
)
from storefront_api.modules.organizations.routes import router


__all__ = [
    "Organization",
    "OrganizationLookup",
    "OrganizationRepository",
    "router",
]
