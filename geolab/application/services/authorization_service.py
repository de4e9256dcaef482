"""Authorization service: permission checks plus hierarchical access guards."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from geolab.application.dtos.organization import OrganizationResult
from geolab.application.interfaces.services import IAccessTarget
from geolab.application.services.hierarchical_access_resolver import (
    HierarchicalAccessResolver,
)
from geolab.domain.entities.actor import Actor
from geolab.domain.enums import AccessLevel, OrganizationType
from geolab.domain.exceptions import AuthorizationException
from geolab.domain.roles import Permission, has_permission

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Centralized checks used by endpoints; raises a generic AuthorizationException on denial."""

    def __init__(self, access_resolver: HierarchicalAccessResolver) -> None:
        self.access_resolver = access_resolver

    def check_permission(self, actor: Actor, permission: Permission | str) -> bool:
        """Return True if the actor's role grants permission."""
        return has_permission(actor.role, permission)

    def require_permission(self, actor: Actor, permission: Permission | str) -> None:
        """Raise AuthorizationException if the actor's role lacks permission."""
        if not self.check_permission(actor, permission):
            code = getattr(permission, "value", permission)
            logger.debug("Permission %s denied for %s (%s)", code, actor.uid, actor.role.value)
            raise AuthorizationException(resource="permission", action=code)

    async def require_user_access(self, actor: Actor, target: IAccessTarget) -> None:
        """Raise AuthorizationException unless the actor may access target."""
        decision = await self.access_resolver.check_user_access(actor, target)
        if not decision.allowed:
            logger.debug("User access denied for %s: %s", actor.uid, decision.reason)
            raise AuthorizationException(resource="user", action="read")

    async def require_organization_access(self, actor: Actor, organization_id: int) -> None:
        """Raise AuthorizationException unless organization_id is visible to the actor."""
        if not await self.access_resolver.can_access_organization(actor, organization_id):
            logger.debug("Organization %s not accessible to %s", organization_id, actor.uid)
            raise AuthorizationException(resource="organization", action="read")

    def require_headquarters_control(self, actor: Actor, headquarters_id: int) -> None:
        """Raise AuthorizationException unless the actor's home is headquarters_id.

        Placing an organization under a headquarters is reserved to that
        headquarters' own members.
        """
        if actor.organization_id is None or actor.organization_id != headquarters_id:
            logger.info(
                "Hierarchy change under %s denied for %s (home %s)",
                headquarters_id,
                actor.uid,
                actor.organization_id,
            )
            raise AuthorizationException(resource="organization", action="manage_hierarchy")

    def require_hierarchy_control(
        self,
        actor: Actor,
        organization: OrganizationResult,
        changes: Mapping[str, Any],
    ) -> None:
        """Guard changes to type, parent or access level of organization.

        Nobody changes these on their own home organization. An affiliate's
        fields belong to its parent headquarters, and turning an organization
        into an affiliate needs the new parent's members. Other hierarchy
        changes are refused.

        Raises:
            AuthorizationException: If the actor does not govern the change.
        """
        changed = changed_hierarchy_fields(organization, changes)
        if not changed:
            return
        if actor.organization_id is None or actor.organization_id == organization.id:
            logger.info(
                "Self-service hierarchy change %s on %s denied for %s",
                sorted(changed),
                organization.id,
                actor.uid,
            )
            raise AuthorizationException(resource="organization", action="manage_hierarchy")
        governing: set[int | None] = set()
        if organization.organization_type == OrganizationType.AFFILIATE:
            governing.add(organization.parent_organization_id)
        new_type = OrganizationType(
            changes.get("organization_type", organization.organization_type)
        )
        if new_type == OrganizationType.AFFILIATE:
            governing.add(
                changes.get("parent_organization_id", organization.parent_organization_id)
            )
        if not governing:
            raise AuthorizationException(resource="organization", action="manage_hierarchy")
        for headquarters_id in governing:
            if headquarters_id is None:
                raise AuthorizationException(resource="organization", action="manage_hierarchy")
            self.require_headquarters_control(actor, headquarters_id)


def changed_hierarchy_fields(
    organization: OrganizationResult, changes: Mapping[str, Any]
) -> set[str]:
    """Return the hierarchy fields in changes whose value differs from organization."""
    changed: set[str] = set()
    if (
        "organization_type" in changes
        and OrganizationType(changes["organization_type"]) != organization.organization_type
    ):
        changed.add("organization_type")
    if (
        "access_level" in changes
        and AccessLevel(changes["access_level"]) != organization.access_level
    ):
        changed.add("access_level")
    if (
        "parent_organization_id" in changes
        and changes["parent_organization_id"] != organization.parent_organization_id
    ):
        changed.add("parent_organization_id")
    return changed
