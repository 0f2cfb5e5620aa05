"""Offset pagination for organization-scoped tables.

Shared helper for tenant-scoped feature modules: any model built on
``OrganizationScopedMixin`` (and optionally ``SoftDeleteMixin``) can be
listed for the request's tenant with

    rows, total = await paginate(db, Product, tenant.id, params)

The organizations module itself has no listing endpoint.
"""

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_api.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class PaginationParams(BaseModel):
    """Offset pagination query parameters."""

    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    offset: int = Field(default=0, ge=0)
    order_by: str | None = None
    direction: Literal["asc", "desc"] = "asc"


def scoped_query(model: Any, organization_id: UUID) -> Select[Any]:
    """Select rows of one organization, skipping soft-deleted ones."""
    stmt = select(model).where(model.organization_id == organization_id)
    if hasattr(model, "deleted_at"):
        stmt = stmt.where(model.deleted_at.is_(None))
    return stmt


def apply_pagination(stmt: Select[Any], model: Any, params: PaginationParams) -> Select[Any]:
    """Apply limit, offset and ordering.

    An unknown ``order_by`` column is ignored; without one, rows come
    newest first when the model has ``created_at``.
    """
    stmt = stmt.limit(params.limit).offset(params.offset)

    columns = model.__table__.columns
    column = columns.get(params.order_by) if params.order_by else None
    if column is not None:
        return stmt.order_by(column.desc() if params.direction == "desc" else column.asc())
    if "created_at" in columns:
        return stmt.order_by(columns["created_at"].desc())
    return stmt


async def paginate(
    session: AsyncSession,
    model: Any,
    organization_id: UUID,
    params: PaginationParams,
) -> tuple[list[Any], int]:
    """Fetch one page of an organization's rows.

    Args:
        session: Database session
        model: ORM model with an ``organization_id`` column
        organization_id: Tenant whose rows are listed
        params: Pagination parameters

    Returns:
        Tuple of (rows, total count)
    """
    base = scoped_query(model, organization_id)

    count_stmt = select(func.count()).select_from(base.subquery())
    total = (await session.execute(count_stmt)).scalar_one()

    result = await session.execute(apply_pagination(base, model, params))
    return list(result.scalars().all()), total
