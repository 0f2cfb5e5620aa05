"""Organization database models."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront_api.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH
from storefront_api.core.database.base import Base, TimestampMixin, UUIDMixin


class Organization(Base, UUIDMixin, TimestampMixin):
    """Organization model: one tenant of the platform.

    All tenant-scoped data references this table via organization_id.
    The slug is the normalized tenant identifier hostnames resolve to.
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    logo: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name}, slug={self.slug})>"
