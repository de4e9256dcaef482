"""Hierarchical access resolver: role rank AND organization hierarchy.

Single authorization entry point for user and organization visibility.
The actor is always passed explicitly; there is no ambient current user.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TypeVar

from geolab.application.dtos.access import AccessDecision
from geolab.application.interfaces.repositories import IOrganizationDirectory
from geolab.application.interfaces.services import IAccessTarget
from geolab.application.services.organization_access_resolver import (
    OrganizationAccessResolver,
)
from geolab.domain.entities.actor import Actor
from geolab.domain.roles import can_act_as_superior_of

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=IAccessTarget)


class HierarchicalAccessResolver:
    """Combines role-rank superiority with organization reachability.

    Both checks are mandatory. The role check runs first so an unknown role
    label on either side always raises UnknownRoleException, even when the
    organization check alone would deny.
    """

    def __init__(self, organization_resolver: OrganizationAccessResolver) -> None:
        self.organization_resolver = organization_resolver

    @classmethod
    def for_request(
        cls, directory: IOrganizationDirectory, *, strict: bool = False
    ) -> HierarchicalAccessResolver:
        """Build a resolver with a fresh memo for one request."""
        return cls(OrganizationAccessResolver(directory, strict=strict))

    async def check_user_access(self, actor: Actor, target: IAccessTarget) -> AccessDecision:
        """Return the decision with an internal reason (never sent to clients)."""
        if not can_act_as_superior_of(actor.role, target.role):
            return AccessDecision(False, "actor role ranks below target role")
        if actor.organization_id is None:
            return AccessDecision(False, "actor has no organization")
        if target.organization_id is None:
            return AccessDecision(False, "target has no organization")
        if not await self.organization_resolver.can_access_organization(
            actor.organization_id, target.organization_id
        ):
            return AccessDecision(False, "target organization outside actor hierarchy")
        return AccessDecision(True)

    async def can_access_user(self, actor: Actor, target: IAccessTarget) -> bool:
        """Return True only if actor outranks or equals target and can see its organization."""
        decision = await self.check_user_access(actor, target)
        if not decision.allowed:
            logger.debug("User access denied for %s: %s", actor.uid, decision.reason)
        return decision.allowed

    async def filter_users(self, actor: Actor, candidates: Iterable[T]) -> list[T]:
        """Return the candidates actor may access, in input order. Candidates are not modified."""
        return [
            candidate
            for candidate in candidates
            if (await self.check_user_access(actor, candidate)).allowed
        ]

    async def can_access_organization(self, actor: Actor, target_org_id: int) -> bool:
        """Return True when target_org_id is visible from the actor's organization.

        Role rank does not matter here. An actor without an organization is denied.
        """
        if actor.organization_id is None:
            return False
        return await self.organization_resolver.can_access_organization(
            actor.organization_id, target_org_id
        )

    async def accessible_organizations(self, actor: Actor) -> frozenset[int]:
        """Return all organization ids visible to actor (empty without an organization)."""
        if actor.organization_id is None:
            return frozenset()
        return await self.organization_resolver.accessible_organizations(actor.organization_id)
