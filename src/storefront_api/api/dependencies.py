"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_api.core.cache import CacheProvider
from storefront_api.core.database import get_db


# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]


def get_cache(request: Request) -> CacheProvider:
    """Cache provider built at startup."""
    cache: CacheProvider = request.app.state.cache
    return cache


AppCache = Annotated[CacheProvider, Depends(get_cache)]
