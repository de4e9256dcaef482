"""Organization repository with optional caching. Returns application DTOs.

Implements IOrganizationDirectory for the access resolver: backend errors
and timeouts become OrganizationLookupFailedException, a missing row is None.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import partial
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from geolab.application.dtos.organization import OrganizationCreate, OrganizationResult
from geolab.application.interfaces.services import ICacheService
from geolab.domain.enums import AccessLevel, OrganizationType
from geolab.domain.exceptions import OrganizationLookupFailedException
from geolab.infrastructure.cache.keys import organization_affiliates_key, organization_key
from geolab.infrastructure.persistence.database import after_commit
from geolab.infrastructure.persistence.models.organization import Organization
from geolab.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _org_to_result(org: Organization) -> OrganizationResult:
    """Map ORM Organization to application OrganizationResult."""
    return OrganizationResult(
        id=org.id,
        name=org.name,
        organization_type=OrganizationType(org.organization_type),
        parent_organization_id=org.parent_organization_id,
        access_level=AccessLevel(org.access_level),
        is_active=org.is_active,
    )


def _result_to_dict(org: OrganizationResult) -> dict[str, Any]:
    return {
        "id": org.id,
        "name": org.name,
        "organization_type": org.organization_type.value,
        "parent_organization_id": org.parent_organization_id,
        "access_level": org.access_level.value,
        "is_active": org.is_active,
    }


def _result_from_cached(cached: Mapping[str, Any]) -> OrganizationResult:
    return OrganizationResult(
        id=cached["id"],
        name=cached["name"],
        organization_type=OrganizationType(cached["organization_type"]),
        parent_organization_id=cached.get("parent_organization_id"),
        access_level=AccessLevel(cached.get("access_level", AccessLevel.ISOLATED.value)),
        is_active=cached.get("is_active", True),
    )


class OrganizationRepository(BaseRepository[Organization]):
    """Organization repository. Optional cache (inject cache_ttl).

    Cached keys: organization_key(id) and organization_affiliates_key(hq_id).
    Every create/update invalidates the record key and the affiliate lists of
    the old and new parent. With invalidate_after_commit the deletes wait for
    the write transaction to commit, so a concurrent read cannot put the old
    record back into the cache.
    """

    def __init__(
        self,
        db: AsyncSession,
        cache_service: ICacheService | None = None,
        *,
        cache_ttl: int = 60,
        invalidate_after_commit: bool = False,
    ) -> None:
        super().__init__(db, Organization)
        self.cache = cache_service
        self.cache_ttl = cache_ttl
        self.invalidate_after_commit = invalidate_after_commit

    def _cache_on(self) -> bool:
        return self.cache is not None and self.cache.is_available()

    async def get_entity_by_id(self, organization_id: int) -> Organization | None:
        """Get organization ORM by ID for update (bypasses cache, reads from DB)."""
        return await super().get_by_id(organization_id)

    async def get_by_id(self, organization_id: int) -> OrganizationResult | None:
        """Get organization by ID, from cache if available.

        Raises:
            OrganizationLookupFailedException: On database errors or timeouts.
        """
        if self._cache_on():
            cached = await self.cache.get(organization_key(organization_id))
            if cached is not None:
                return _result_from_cached(cached)
        try:
            org = await super().get_by_id(organization_id)
        except (SQLAlchemyError, TimeoutError) as exc:
            raise OrganizationLookupFailedException(
                organization_id, exc.__class__.__name__
            ) from exc
        if org is None:
            return None
        result = _org_to_result(org)
        if self._cache_on():
            await self.cache.set(
                organization_key(organization_id), _result_to_dict(result), ttl=self.cache_ttl
            )
        return result

    async def list_affiliates(self, headquarters_id: int) -> list[OrganizationResult]:
        """Return affiliates of headquarters_id ordered by id, from cache if available.

        Raises:
            OrganizationLookupFailedException: On database errors or timeouts.
        """
        key = organization_affiliates_key(headquarters_id)
        if self._cache_on():
            cached = await self.cache.get(key)
            if cached is not None:
                return [_result_from_cached(item) for item in cached]
        try:
            result = await self.db.execute(
                select(Organization)
                .where(
                    Organization.parent_organization_id == headquarters_id,
                    Organization.organization_type == OrganizationType.AFFILIATE.value,
                )
                .order_by(Organization.id)
            )
            affiliates = [_org_to_result(org) for org in result.scalars().all()]
        except (SQLAlchemyError, TimeoutError) as exc:
            raise OrganizationLookupFailedException(
                headquarters_id, exc.__class__.__name__
            ) from exc
        if self._cache_on():
            await self.cache.set(
                key, [_result_to_dict(org) for org in affiliates], ttl=self.cache_ttl
            )
        return affiliates

    async def list_by_ids(self, organization_ids: set[int]) -> list[OrganizationResult]:
        """Return organizations whose id is in organization_ids, ordered by id."""
        if not organization_ids:
            return []
        result = await self.db.execute(
            select(Organization)
            .where(Organization.id.in_(organization_ids))
            .order_by(Organization.id)
        )
        return [_org_to_result(org) for org in result.scalars().all()]

    async def create_organization(self, data: OrganizationCreate) -> OrganizationResult:
        """Create organization; return created entity."""
        org = Organization(
            name=data.name,
            organization_type=OrganizationType(data.organization_type).value,
            parent_organization_id=data.parent_organization_id,
            access_level=AccessLevel(data.access_level).value,
        )
        created = await self.create(org)
        return _org_to_result(created)

    async def update_organization(
        self, organization_id: int, changes: Mapping[str, Any]
    ) -> OrganizationResult | None:
        """Apply changes to an organization; None if it does not exist."""
        org = await self.get_entity_by_id(organization_id)
        if org is None:
            return None
        old_parent_id = org.parent_organization_id
        for field, value in changes.items():
            if field in ("organization_type", "access_level") and value is not None:
                value = getattr(value, "value", value)
            setattr(org, field, value)
        updated = await self.update(org)
        if old_parent_id is not None and old_parent_id != updated.parent_organization_id:
            await self._invalidate_keys([organization_affiliates_key(old_parent_id)])
        return _org_to_result(updated)

    async def _on_after_create(self, obj: Organization) -> None:
        await super()._on_after_create(obj)
        await self._invalidate(obj)

    async def _on_after_update(self, obj: Organization) -> None:
        await super()._on_after_update(obj)
        await self._invalidate(obj)

    async def _invalidate(self, obj: Organization) -> None:
        # A headquarters' own affiliate list may change when its type changes.
        keys = [organization_key(obj.id), organization_affiliates_key(obj.id)]
        if obj.parent_organization_id is not None:
            keys.append(organization_affiliates_key(obj.parent_organization_id))
        await self._invalidate_keys(keys)

    async def _invalidate_keys(self, keys: list[str]) -> None:
        if not self._cache_on():
            return
        if self.invalidate_after_commit:
            after_commit(self.db, partial(self._delete_keys, keys))
        else:
            await self._delete_keys(keys)

    async def _delete_keys(self, keys: list[str]) -> None:
        if not self._cache_on():
            return
        for key in keys:
            await self.cache.delete(key)
