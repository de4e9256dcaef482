"""Organization management: create and update with hierarchy validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from geolab.application.dtos.organization import OrganizationCreate, OrganizationResult
from geolab.application.interfaces.repositories import IOrganizationRepository
from geolab.domain.entities.organization import OrganizationEntity
from geolab.domain.enums import AccessLevel, OrganizationType
from geolab.domain.exceptions import OrganizationNotFoundException, ValidationException

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset(
    {"name", "organization_type", "parent_organization_id", "access_level", "is_active"}
)


class OrganizationService:
    """Creates and updates organizations, keeping the hierarchy well formed.

    Invariants: independents and headquarters have no parent; an affiliate
    has exactly one parent and that parent is a headquarters; a headquarters
    that still has affiliates cannot change type.
    """

    def __init__(self, repository: IOrganizationRepository) -> None:
        self.repository = repository

    async def get_organization(self, organization_id: int) -> OrganizationResult | None:
        return await self.repository.get_by_id(organization_id)

    async def create_organization(self, data: OrganizationCreate) -> OrganizationResult:
        """Validate and persist a new organization.

        Raises:
            ValidationException: If the shape or the parent is invalid.
        """
        entity = OrganizationEntity(
            id=None,
            name=data.name,
            organization_type=data.organization_type,
            parent_organization_id=data.parent_organization_id,
            access_level=data.access_level,
        )
        await self._validate_parent(entity)
        created = await self.repository.create_organization(data)
        logger.info(
            "Organization created: id=%s type=%s parent=%s",
            created.id,
            created.organization_type.value,
            created.parent_organization_id,
        )
        return created

    async def update_organization(
        self, organization_id: int, changes: Mapping[str, Any]
    ) -> OrganizationResult:
        """Apply a partial update after re-validating the resulting hierarchy.

        Args:
            organization_id: Organization to update.
            changes: Only the fields being changed (e.g. from model_dump(exclude_unset=True)).

        Raises:
            OrganizationNotFoundException: If the organization does not exist.
            ValidationException: If the update would break the hierarchy.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(f"Fields not updatable: {sorted(unknown)}")
        current = await self.repository.get_by_id(organization_id)
        if current is None:
            raise OrganizationNotFoundException(organization_id)

        new_type = OrganizationType(changes.get("organization_type", current.organization_type))
        new_parent = changes.get("parent_organization_id", current.parent_organization_id)
        if new_type != OrganizationType.AFFILIATE and "parent_organization_id" not in changes:
            # Leaving the affiliate type drops the parent implicitly.
            new_parent = None
        entity = OrganizationEntity(
            id=current.id,
            name=changes.get("name", current.name),
            organization_type=new_type,
            parent_organization_id=new_parent,
            access_level=AccessLevel(changes.get("access_level", current.access_level)),
        )

        if current.organization_type == OrganizationType.HEADQUARTERS and not entity.is_headquarters():
            affiliates = await self.repository.list_affiliates(organization_id)
            if affiliates:
                raise ValidationException(
                    "Headquarters with affiliates cannot change type",
                    field="organization_type",
                )
        if (
            entity.organization_type != current.organization_type
            or entity.parent_organization_id != current.parent_organization_id
        ):
            await self._validate_parent(entity)

        applied = dict(changes)
        applied["organization_type"] = entity.organization_type
        applied["parent_organization_id"] = entity.parent_organization_id
        updated = await self.repository.update_organization(organization_id, applied)
        if updated is None:
            raise OrganizationNotFoundException(organization_id)
        logger.info("Organization updated: id=%s fields=%s", organization_id, sorted(changes))
        return updated

    async def _validate_parent(self, entity: OrganizationEntity) -> None:
        """Check the parent exists and is a headquarters (affiliates only)."""
        if entity.parent_organization_id is None:
            return
        parent = await self.repository.get_by_id(entity.parent_organization_id)
        if parent is None:
            raise ValidationException(
                "Parent organization not found", field="parent_organization_id"
            )
        if parent.organization_type != OrganizationType.HEADQUARTERS:
            raise ValidationException(
                "Parent organization must be a headquarters",
                field="parent_organization_id",
            )
