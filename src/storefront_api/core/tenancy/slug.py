"""Hostname to tenant slug parsing.

Tenancy is carried by the hostname a storefront is served from:

    tenant.localhost    -> "tenant"
    acme.example.com    -> "acme"          (subdomain tenancy)
    www.example.com     -> "example-com"   (dedicated domain)
    example.com         -> "example-com"

There is no public-suffix awareness: a host with three or more labels
always yields its leftmost label, so ``shop.example.co.uk`` is ``shop``
and ``example.co.uk`` is ``example``.

Parsing is not idempotent. A resolved slug such as ``acme`` is a
single-label host and parses to None; never feed a slug back in.
"""

import re


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_slug(value: str) -> str:
    """Lowercase and collapse every non ``[a-z0-9]`` run into one hyphen.

    Examples:
        >>> normalize_slug("Example.COM")
        'example-com'
        >>> normalize_slug("--Big  Shop!--")
        'big-shop'
    """
    return _NON_ALNUM.sub("-", value.lower()).strip("-")


def strip_port(host: str) -> str:
    """Remove a ``:port`` suffix from a Host header value.

    Bracketed IPv6 literals keep their brackets: ``[::1]:8000`` -> ``[::1]``.
    """
    host = host.strip()
    if host.startswith("["):
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    return host.split(":", 1)[0]


def _candidate(hostname: str) -> str | None:
    parts = hostname.split(".")

    if "localhost" in hostname:
        # tenant.localhost -> "tenant"; bare localhost carries no tenant
        return parts[0] if len(parts) > 1 else None

    clean_parts = parts[1:] if parts[0] == "www" else parts
    if len(clean_parts) == 2:
        return ".".join(clean_parts)
    if len(clean_parts) > 2:
        return clean_parts[0]
    return None


def parse_tenant_slug(hostname: str) -> str | None:
    """Derive the tenant slug for a hostname.

    Args:
        hostname: Hostname without port (see ``strip_port``)

    Returns:
        The normalized slug, or None when the host carries no tenant
    """
    candidate = _candidate(hostname)
    if candidate is None:
        return None
    return normalize_slug(candidate) or None
