"""Per-request tenant context."""

from dataclasses import dataclass
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TenantRecord(BaseModel):
    """Read-only snapshot of an organization, safe to cache and share.

    Built from the ORM row at lookup time so cached values never hold
    instances bound to a closed session.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    slug: str
    name: str
    logo: str | None = None


@dataclass(frozen=True, slots=True)
class TenantContext:
    """Tenant resolution outcome attached to each request.

    Attributes:
        slug: Slug derived from the request hostname, None if the host carries none
        tenant: Organization matching the slug, None if there is no match
    """

    slug: str | None = None
    tenant: TenantRecord | None = None

    @property
    def tenant_id(self) -> UUID | None:
        return self.tenant.id if self.tenant else None

    @property
    def resolved(self) -> bool:
        return self.tenant is not None
