"""Multi-tenant storefront API."""
