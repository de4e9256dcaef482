"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from geolab.application.dtos.organization import OrganizationCreate, OrganizationResult
    from geolab.application.dtos.user import UserResult


# Organization directory (read side consumed by the access resolver)
class IOrganizationDirectory(Protocol):
    """Read-only organization lookups used by access checks.

    Implementations raise OrganizationLookupFailedException on backend
    errors or timeouts. A missing organization is None, not an error.
    """

    async def get_by_id(self, organization_id: int) -> OrganizationResult | None:
        """Return organization by id, or None if it does not exist."""

    async def list_affiliates(self, headquarters_id: int) -> list[OrganizationResult]:
        """Return affiliates whose parent is headquarters_id (empty if none)."""


class IOrganizationRepository(IOrganizationDirectory, Protocol):
    """Protocol for organization persistence (directory plus writes)."""

    async def list_by_ids(self, organization_ids: set[int]) -> list[OrganizationResult]:
        """Return organizations whose id is in organization_ids, ordered by id."""

    async def create_organization(self, data: OrganizationCreate) -> OrganizationResult:
        """Persist a new organization and return it."""

    async def update_organization(
        self, organization_id: int, changes: Mapping[str, Any]
    ) -> OrganizationResult | None:
        """Apply changes to an organization. Returns None if it does not exist."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: int) -> UserResult | None:
        """Return user by id."""

    async def get_by_firebase_uid(self, firebase_uid: str) -> UserResult | None:
        """Return user by identity-provider uid."""

    async def list_users(
        self,
        skip: int = 0,
        limit: int = 100,
        organization_ids: Collection[int] | None = None,
    ) -> list[UserResult]:
        """Return users ordered by id (active only), optionally within organization_ids."""
