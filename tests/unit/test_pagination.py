"""Tests for organization-scoped pagination."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from pydantic import ValidationError
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from storefront_api.core.database import (
    Base,
    OrganizationScopedMixin,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
)
from storefront_api.core.pagination import (
    PaginationParams,
    apply_pagination,
    paginate,
    scoped_query,
)
from storefront_api.modules.organizations import Organization  # noqa: F401


class Product(Base, UUIDMixin, TimestampMixin, OrganizationScopedMixin, SoftDeleteMixin):
    __tablename__ = "test_products"

    title: Mapped[str] = mapped_column(String(255))


class Collection(Base, UUIDMixin, OrganizationScopedMixin):
    __tablename__ = "test_collections"


class TestPaginationParams:
    """Tests for PaginationParams."""

    def test_defaults(self):
        params = PaginationParams()

        assert params.limit == 20
        assert params.offset == 0
        assert params.direction == "asc"

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_bounds(self, limit: int):
        with pytest.raises(ValidationError):
            PaginationParams(limit=limit)

    def test_negative_offset(self):
        with pytest.raises(ValidationError):
            PaginationParams(offset=-1)


class TestScopedQuery:
    """Tests for scoped_query."""

    def test_filters_on_organization_and_soft_delete(self):
        sql = str(scoped_query(Product, uuid4()))

        assert "test_products.organization_id = " in sql
        assert "test_products.deleted_at IS NULL" in sql

    def test_without_soft_delete(self):
        assert "deleted_at" not in str(scoped_query(Collection, uuid4()))


class TestApplyPagination:
    """Tests for apply_pagination."""

    def test_orders_by_requested_column(self):
        params = PaginationParams(order_by="title", direction="desc")

        sql = str(apply_pagination(scoped_query(Product, uuid4()), Product, params))

        assert "ORDER BY test_products.title DESC" in sql
        assert "LIMIT" in sql
        assert "OFFSET" in sql

    def test_unknown_column_falls_back_to_newest(self):
        params = PaginationParams(order_by="nope")

        sql = str(apply_pagination(scoped_query(Product, uuid4()), Product, params))

        assert "ORDER BY test_products.created_at DESC" in sql


class TestPaginate:
    """Tests for paginate."""

    async def test_returns_rows_and_total(self):
        rows = [MagicMock(), MagicMock()]
        count_result = MagicMock()
        count_result.scalar_one.return_value = 12
        page_result = MagicMock()
        page_result.scalars.return_value.all.return_value = rows
        session = AsyncMock()
        session.execute.side_effect = [count_result, page_result]

        items, total = await paginate(session, Product, uuid4(), PaginationParams(limit=2))

        assert items == rows
        assert total == 12
        assert session.execute.await_count == 2
