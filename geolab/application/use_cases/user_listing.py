"""User listing use case: pages over visible users, not over raw rows.

skip and limit count users the actor may access. Rows are read in batches
restricted to the actor's accessible organizations, then filtered by role
rank, until limit visible users are collected or the rows run out.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from geolab.application.dtos.user import UserResult
from geolab.application.services.hierarchical_access_resolver import (
    HierarchicalAccessResolver,
)
from geolab.domain.entities.actor import Actor

if TYPE_CHECKING:
    from geolab.application.interfaces.repositories import IUserRepository

DEFAULT_BATCH_SIZE = 200


class UserListingService:
    """Lists users visible to an actor with stable, gap-free pages."""

    def __init__(
        self,
        user_repo: "IUserRepository",
        access_resolver: HierarchicalAccessResolver,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.user_repo = user_repo
        self.access_resolver = access_resolver
        self.batch_size = batch_size

    async def list_visible_users(
        self, actor: Actor, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        """Return up to limit visible users after skipping skip visible users, in id order.

        Raises:
            UnknownRoleException: If a scanned user carries an unknown role label.
        """
        organization_ids = await self.access_resolver.accessible_organizations(actor)
        if not organization_ids or limit <= 0:
            return []
        visible: list[UserResult] = []
        to_skip = skip
        offset = 0
        while len(visible) < limit:
            batch = await self.user_repo.list_users(
                skip=offset, limit=self.batch_size, organization_ids=organization_ids
            )
            if not batch:
                break
            offset += len(batch)
            for user in await self.access_resolver.filter_users(actor, batch):
                if to_skip:
                    to_skip -= 1
                    continue
                visible.append(user)
                if len(visible) == limit:
                    break
            if len(batch) < self.batch_size:
                break
        return visible
