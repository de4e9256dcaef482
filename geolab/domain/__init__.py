"""Domain layer: entities, enums, role ranks, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from geolab.domain.entities import Actor, OrganizationEntity
from geolab.domain.enums import AccessLevel, OrganizationType, Role
from geolab.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    GeolabException,
    OrganizationLookupFailedException,
    OrganizationNotFoundException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    UnknownRoleException,
    ValidationException,
)
from geolab.domain.roles import (
    Permission,
    can_act_as_superior_of,
    has_permission,
    parse_role,
    rank,
)

__all__ = [
    "AccessLevel",
    "Actor",
    "AuthenticationException",
    "AuthorizationException",
    "GeolabException",
    "OrganizationEntity",
    "OrganizationLookupFailedException",
    "OrganizationNotFoundException",
    "OrganizationType",
    "Permission",
    "ResourceNotFoundException",
    "Role",
    "SqlNotConfiguredException",
    "UnknownRoleException",
    "ValidationException",
    "can_act_as_superior_of",
    "has_permission",
    "parse_role",
    "rank",
]
