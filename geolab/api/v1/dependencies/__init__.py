"""FastAPI dependencies (composition root): sessions, repositories, actor, access."""

from geolab.api.v1.dependencies.access import (
    get_access_resolver,
    get_authorization_service,
    get_organization_service,
    require_permission,
)
from geolab.api.v1.dependencies.audit import audit_action
from geolab.api.v1.dependencies.auth import get_current_actor, get_current_actor_optional
from geolab.api.v1.dependencies.db import (
    get_organization_cache,
    get_organization_repo,
    get_organization_repo_for_write,
    get_user_repo,
)

__all__ = [
    "audit_action",
    "get_access_resolver",
    "get_authorization_service",
    "get_current_actor",
    "get_current_actor_optional",
    "get_organization_cache",
    "get_organization_repo",
    "get_organization_repo_for_write",
    "get_organization_service",
    "get_user_repo",
    "require_permission",
]
