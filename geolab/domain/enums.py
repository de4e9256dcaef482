"""Domain enumerations for the GeoLab access service.

Enums represent fixed sets of domain values (roles, organization shape).
Role ranks live in geolab.domain.roles, not on the enum.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Role(_ValuesMixin, str, Enum):
    """User role. Exactly six labels; anything else is an unknown role."""

    VIEWER = "VIEWER"
    TECHNICIAN = "TECHNICIAN"
    SUPERVISOR = "SUPERVISOR"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    DEVELOPER = "DEVELOPER"


class OrganizationType(_ValuesMixin, str, Enum):
    """Position of an organization in the hierarchy."""

    INDEPENDENT = "independent"
    HEADQUARTERS = "headquarters"
    AFFILIATE = "affiliate"


class AccessLevel(_ValuesMixin, str, Enum):
    """How far an affiliate's visibility reaches outside itself.

    Only meaningful for affiliates; ignored for independents.
    """

    ISOLATED = "isolated"
    PARENT_ACCESS = "parent_access"
    FULL_HIERARCHY = "full_hierarchy"
