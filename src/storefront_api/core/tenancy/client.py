"""Client-side tenant slug accessor.

Used by code that runs on behalf of a browsing context, such as a
server-side renderer or a script driving a storefront page. The caller
passes the page location it is rendering; when there is no browsing
context there is nothing to resolve.
"""

from urllib.parse import urlsplit

from storefront_api.core.tenancy.slug import parse_tenant_slug


def client_tenant_slug(location: str | None = None) -> str | None:
    """Return the tenant slug for the current page location.

    Args:
        location: Page URL (``https://acme.example.com/cart``) or a bare
            hostname as a browser reports it (``acme.example.com``).
            None means no browsing context is available.

    Returns:
        The tenant slug, or None
    """
    if location is None:
        return None

    if "://" not in location:
        return parse_tenant_slug(location)

    try:
        hostname = urlsplit(location).hostname
    except ValueError:
        return None
    return parse_tenant_slug(hostname) if hostname else None
