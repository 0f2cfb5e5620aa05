"""Database layer - session management, base models, and mixins."""

from storefront_api.core.database.base import (
    Base,
    OrganizationScopedMixin,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
)
from storefront_api.core.database.session import (
    async_engine,
    async_session_factory,
    dispose_engine,
    get_db,
)


__all__ = [
    "Base",
    "OrganizationScopedMixin",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDMixin",
    "async_engine",
    "async_session_factory",
    "dispose_engine",
    "get_db",
]
