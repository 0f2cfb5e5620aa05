"""Organization repository and the tenant store adapter."""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront_api.core.tenancy.context import TenantRecord
from storefront_api.modules.organizations.models import Organization


logger = structlog.get_logger()


class OrganizationRepository:
    """Repository for Organization database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_slug(self, slug: str) -> Organization | None:
        """Get an organization by its exact slug.

        Args:
            slug: Normalized tenant slug (case-sensitive match)

        Returns:
            Organization if found, None otherwise
        """
        stmt = select(Organization).where(Organization.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class OrganizationLookup:
    """Tenant store used by TenantResolver.

    Opens a short-lived session per lookup so it can run outside any
    request-scoped session, from middleware.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def __call__(self, slug: str) -> TenantRecord | None:
        async with self._session_factory() as session:
            organization = await OrganizationRepository(session).get_by_slug(slug)
            if organization is None:
                return None
            return TenantRecord.model_validate(organization)
