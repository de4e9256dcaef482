"""User repository. Returns application DTOs (UserResult)."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geolab.application.dtos.user import UserResult
from geolab.infrastructure.persistence.models.user import User
from geolab.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(user: User) -> UserResult:
    """Map ORM User to application UserResult (role label unchanged)."""
    return UserResult(
        id=user.id,
        firebase_uid=user.firebase_uid,
        email=user.email,
        name=user.name,
        role=user.role,
        organization_id=user.organization_id,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserRepository(BaseRepository[User]):
    """User repository (read side used by user listing and lookup endpoints)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: int) -> UserResult | None:
        user = await super().get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def get_by_firebase_uid(self, firebase_uid: str) -> UserResult | None:
        """Return user linked to the identity-provider uid, or None."""
        result = await self.db.execute(select(User).where(User.firebase_uid == firebase_uid))
        user = result.scalar_one_or_none()
        return _user_to_result(user) if user else None

    async def list_users(
        self,
        skip: int = 0,
        limit: int = 100,
        organization_ids: Collection[int] | None = None,
    ) -> list[UserResult]:
        """Return active users ordered by id with pagination.

        organization_ids, when given, restricts the rows to those organizations.
        """
        query = select(User).where(User.is_active.is_(True))
        if organization_ids is not None:
            query = query.where(User.organization_id.in_(list(organization_ids)))
        result = await self.db.execute(query.order_by(User.id).offset(skip).limit(limit))
        return [_user_to_result(user) for user in result.scalars().all()]
