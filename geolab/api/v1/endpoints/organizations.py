"""Organization API: visibility via the access resolver; writes via OrganizationService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from geolab.api.v1.dependencies import (
    audit_action,
    get_access_resolver,
    get_authorization_service,
    get_current_actor,
    get_organization_repo,
    get_organization_service,
    require_permission,
)
from geolab.application.dtos.organization import OrganizationCreate
from geolab.application.services.authorization_service import AuthorizationService
from geolab.application.services.hierarchical_access_resolver import (
    HierarchicalAccessResolver,
)
from geolab.application.services.organization_service import OrganizationService
from geolab.core.limiter import limit_organization_writes
from geolab.domain.entities.actor import Actor
from geolab.domain.exceptions import AuthorizationException
from geolab.domain.roles import Permission
from geolab.infrastructure.persistence.repositories.organization_repo import (
    OrganizationRepository,
)
from geolab.schemas.organization import (
    OrganizationCreateRequest,
    OrganizationResponse,
    OrganizationUpdateRequest,
)

router = APIRouter()


@router.get("/accessible", response_model=list[OrganizationResponse])
async def list_accessible_organizations(
    actor: Annotated[Actor, Depends(get_current_actor)],
    resolver: Annotated[HierarchicalAccessResolver, Depends(get_access_resolver)],
    repo: Annotated[OrganizationRepository, Depends(get_organization_repo)],
):
    """List organizations visible from the actor's organization (role does not matter)."""
    ids = await resolver.accessible_organizations(actor)
    orgs = await repo.list_by_ids(set(ids))
    return [OrganizationResponse.model_validate(org) for org in orgs]


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: int,
    actor: Annotated[Actor, Depends(get_current_actor)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    repo: Annotated[OrganizationRepository, Depends(get_organization_repo)],
):
    """Get one organization. Missing and inaccessible organizations both answer 403."""
    await auth_svc.require_organization_access(actor, organization_id)
    org = await repo.get_by_id(organization_id)
    if org is None:
        raise AuthorizationException(resource="organization", action="read")
    return OrganizationResponse.model_validate(org)


@router.post("", response_model=OrganizationResponse, status_code=201)
@limit_organization_writes
async def create_organization(
    request: Request,
    body: OrganizationCreateRequest,
    actor: Annotated[Actor, Depends(require_permission(Permission.MANAGE_ORGANIZATIONS))],
    _audit: Annotated[Actor, Depends(audit_action("create_organization"))],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
):
    """Create an organization. Affiliates are created by their parent headquarters' members."""
    if body.parent_organization_id is not None:
        auth_svc.require_headquarters_control(actor, body.parent_organization_id)
    created = await service.create_organization(
        OrganizationCreate(
            name=body.name,
            organization_type=body.organization_type,
            parent_organization_id=body.parent_organization_id,
            access_level=body.access_level,
        )
    )
    return OrganizationResponse.model_validate(created)


@router.patch("/{organization_id}", response_model=OrganizationResponse)
@limit_organization_writes
async def update_organization(
    request: Request,
    organization_id: int,
    body: OrganizationUpdateRequest,
    actor: Annotated[Actor, Depends(require_permission(Permission.MANAGE_ORGANIZATIONS))],
    _audit: Annotated[Actor, Depends(audit_action("update_organization"))],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
):
    """Partially update an organization the actor can see.

    Type, parent and access level changes also need hierarchy control, so no
    one widens the visibility of their own organization.
    """
    await auth_svc.require_organization_access(actor, organization_id)
    changes = body.model_dump(exclude_unset=True)
    current = await service.get_organization(organization_id)
    if current is None:
        raise AuthorizationException(resource="organization", action="update")
    auth_svc.require_hierarchy_control(actor, current, changes)
    new_parent = changes.get("parent_organization_id")
    if new_parent is not None:
        await auth_svc.require_organization_access(actor, new_parent)
    updated = await service.update_organization(organization_id, changes)
    return OrganizationResponse.model_validate(updated)
