"""User API: listings filtered by the hierarchical access resolver, sanitized per role."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from geolab.api.v1.dependencies import (
    get_access_resolver,
    get_authorization_service,
    get_user_repo,
    require_permission,
)
from geolab.application.services.authorization_service import AuthorizationService
from geolab.application.services.data_sanitizer import sanitize_for_role
from geolab.application.services.hierarchical_access_resolver import (
    HierarchicalAccessResolver,
)
from geolab.application.use_cases.user_listing import UserListingService
from geolab.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from geolab.core.limiter import limit_reads
from geolab.domain.entities.actor import Actor
from geolab.domain.exceptions import AuthorizationException
from geolab.domain.roles import Permission
from geolab.infrastructure.persistence.repositories.user_repo import UserRepository
from geolab.schemas.user import UserResponse

router = APIRouter()


@router.get("")
@limit_reads
async def list_users(
    request: Request,
    actor: Annotated[Actor, Depends(require_permission(Permission.VIEW_USERS))],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    resolver: Annotated[HierarchicalAccessResolver, Depends(get_access_resolver)],
    skip: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> list[dict[str, Any]]:
    """List users the actor may access (role rank and organization), in id order.

    skip and limit page over visible users only.
    """
    visible = await UserListingService(user_repo, resolver).list_visible_users(
        actor, skip=skip, limit=limit
    )
    return [
        sanitize_for_role(
            UserResponse.model_validate(user).model_dump(mode="json"), actor.role
        )
        for user in visible
    ]


@router.get("/{user_id}")
async def get_user(
    user_id: int,
    actor: Annotated[Actor, Depends(require_permission(Permission.VIEW_USERS))],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> dict[str, Any]:
    """Get one user. Missing and inaccessible users both answer 403."""
    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise AuthorizationException(resource="user", action="read")
    await auth_svc.require_user_access(actor, user)
    return sanitize_for_role(
        UserResponse.model_validate(user).model_dump(mode="json"), actor.role
    )
