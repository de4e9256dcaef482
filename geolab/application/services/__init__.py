"""Application services: access resolution, authorization, organization management."""

from geolab.application.services.authorization_service import AuthorizationService
from geolab.application.services.data_sanitizer import sanitize_for_role
from geolab.application.services.hierarchical_access_resolver import (
    HierarchicalAccessResolver,
)
from geolab.application.services.organization_access_resolver import (
    OrganizationAccessResolver,
)
from geolab.application.services.organization_service import OrganizationService

__all__ = [
    "AuthorizationService",
    "HierarchicalAccessResolver",
    "OrganizationAccessResolver",
    "OrganizationService",
    "sanitize_for_role",
]
