"""Organization API schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class StorefrontTenantResponse(BaseModel):
    """Public tenant details a storefront needs to bootstrap."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    name: str
    logo: str | None = None
