"""DB session, cache, and repository dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from geolab.application.interfaces.services import ICacheService
from geolab.core.config import get_settings
from geolab.infrastructure.persistence.database import get_db, get_db_transactional
from geolab.infrastructure.persistence.repositories import (
    OrganizationRepository,
    UserRepository,
)


def get_organization_cache(request: Request) -> ICacheService | None:
    """Redis cache for organization records, or None when the organization cache is off."""
    if not get_settings().organization_cache_enabled:
        return None
    return getattr(request.app.state, "cache", None)


async def get_organization_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[ICacheService | None, Depends(get_organization_cache)],
) -> OrganizationRepository:
    """Organization repository for reads (also the directory used by access checks)."""
    return OrganizationRepository(
        db, cache, cache_ttl=get_settings().cache_ttl_organizations
    )


async def get_organization_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    cache: Annotated[ICacheService | None, Depends(get_organization_cache)],
) -> OrganizationRepository:
    """Organization repository for writes (transactional; invalidates cache after commit)."""
    return OrganizationRepository(
        db,
        cache,
        cache_ttl=get_settings().cache_ttl_organizations,
        invalidate_after_commit=True,
    )


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository for read operations."""
    return UserRepository(db)
