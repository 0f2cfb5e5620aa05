"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Slugs
MAX_SLUG_LENGTH = 63

# String field lengths
MAX_NAME_LENGTH = 255

# Tenant resolution
TENANT_CACHE_TTL_SECONDS = 300  # 5 minutes
TENANT_CACHE_KEY_PREFIX = "tenant:slug:"

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Redis
REDIS_MAX_CONNECTIONS = 50
