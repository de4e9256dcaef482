"""Access-control dependencies (composition root).

One HierarchicalAccessResolver per request: FastAPI caches dependency
results within a request, so every check in that request shares the memo.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from geolab.application.services.authorization_service import AuthorizationService
from geolab.application.services.hierarchical_access_resolver import (
    HierarchicalAccessResolver,
)
from geolab.application.services.organization_service import OrganizationService
from geolab.core.config import get_settings
from geolab.domain.entities.actor import Actor
from geolab.domain.roles import Permission
from geolab.infrastructure.persistence.repositories import OrganizationRepository

from . import auth
from . import db as db_deps


def get_access_resolver(
    directory: Annotated[OrganizationRepository, Depends(db_deps.get_organization_repo)],
) -> HierarchicalAccessResolver:
    """Request-scoped resolver over the organization directory."""
    return HierarchicalAccessResolver.for_request(
        directory, strict=get_settings().access_strict_mode
    )


def get_authorization_service(
    resolver: Annotated[HierarchicalAccessResolver, Depends(get_access_resolver)],
) -> AuthorizationService:
    """Authorization service bound to the request's resolver."""
    return AuthorizationService(resolver)


def get_organization_service(
    repo: Annotated[OrganizationRepository, Depends(db_deps.get_organization_repo_for_write)],
) -> OrganizationService:
    """Organization service for create/update (composition root)."""
    return OrganizationService(repo)


def require_permission(permission: Permission):
    """Dependency factory: require an authenticated actor whose role grants permission."""

    async def _require(
        actor: Annotated[Actor, Depends(auth.get_current_actor)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Actor:
        auth_svc.require_permission(actor, permission)
        return actor

    return _require
