"""Server-side tenant slug extraction from request headers.

Storefronts call the API cross-origin, so the API's own host says
nothing about the tenant. The storefront origin arrives in ``Referer``
and takes precedence over ``Host``.
"""

from collections.abc import Mapping
from urllib.parse import urlsplit

import structlog

from storefront_api.core.tenancy.slug import parse_tenant_slug, strip_port


logger = structlog.get_logger()


def slug_from_host(headers: Mapping[str, str]) -> str | None:
    """Resolve the slug from the request's own ``Host`` header."""
    host = headers.get("host")
    if not host:
        return None
    return parse_tenant_slug(strip_port(host))


def slug_from_referer(referer: str | None) -> str | None:
    """Resolve the slug from a ``Referer`` URL.

    Malformed values are ignored so the caller can fall back to ``Host``.
    """
    if not referer:
        return None

    try:
        parts = urlsplit(referer.strip())
        hostname = parts.hostname
        _ = parts.port  # raises ValueError on a malformed port
    except ValueError:
        logger.debug("tenant_referer_invalid", referer=referer)
        return None

    if not parts.scheme or not hostname:
        logger.debug("tenant_referer_invalid", referer=referer)
        return None

    return parse_tenant_slug(hostname)


def slug_from_request(headers: Mapping[str, str]) -> str | None:
    """Resolve the slug for a possibly cross-origin API request.

    Priority:
    1. ``Referer`` hostname (storefront origin)
    2. ``Host`` header (same-origin requests)
    """
    return slug_from_referer(headers.get("referer")) or slug_from_host(headers)
