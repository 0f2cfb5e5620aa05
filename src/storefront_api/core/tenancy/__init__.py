"""Tenant resolution and request scoping.

A request's hostname (or its storefront ``Referer``) yields a tenant
slug, the slug yields an organization through a cached lookup, and the
outcome is attached to the request as a TenantContext.
"""

from storefront_api.core.tenancy.client import client_tenant_slug
from storefront_api.core.tenancy.context import TenantContext, TenantRecord
from storefront_api.core.tenancy.dependencies import (
    CurrentTenantContext,
    OptionalTenant,
    RequiredTenant,
    get_optional_tenant,
    get_required_tenant,
    get_tenant_context,
)
from storefront_api.core.tenancy.extractors import (
    slug_from_host,
    slug_from_referer,
    slug_from_request,
)
from storefront_api.core.tenancy.middleware import TenantContextMiddleware
from storefront_api.core.tenancy.resolver import (
    TENANT_MISS_MARKER,
    TenantLookup,
    TenantResolver,
)
from storefront_api.core.tenancy.slug import normalize_slug, parse_tenant_slug, strip_port


__all__ = [
    "TENANT_MISS_MARKER",
    "CurrentTenantContext",
    "OptionalTenant",
    "RequiredTenant",
    "TenantContext",
    "TenantContextMiddleware",
    "TenantLookup",
    "TenantRecord",
    "TenantResolver",
    "client_tenant_slug",
    "get_optional_tenant",
    "get_required_tenant",
    "get_tenant_context",
    "normalize_slug",
    "parse_tenant_slug",
    "slug_from_host",
    "slug_from_referer",
    "slug_from_request",
    "strip_port",
]
