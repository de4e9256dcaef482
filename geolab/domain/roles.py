"""Role ranks and role permissions.

ROLE_RANKS is the single table that orders roles. Every superiority check
goes through rank(); there are no per-role conditionals elsewhere.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from geolab.domain.enums import Role, _ValuesMixin
from geolab.domain.exceptions import UnknownRoleException

ROLE_RANKS: Mapping[Role, int] = {
    Role.VIEWER: 1,
    Role.TECHNICIAN: 2,
    Role.SUPERVISOR: 3,
    Role.MANAGER: 4,
    Role.ADMIN: 5,
    Role.DEVELOPER: 6,
}


def parse_role(label: Any) -> Role:
    """Validate a role label received at a system boundary.

    Surrounding whitespace and case are normalized ("admin " -> ADMIN).
    Anything outside the six canonical labels (including SUPER_ADMIN, None
    and non-strings) raises UnknownRoleException.

    Args:
        label: Raw label from a token claim, a database row or a request.

    Returns:
        The matching Role.

    Raises:
        UnknownRoleException: If the label is not one of the six roles.
    """
    if isinstance(label, Role):
        return label
    if not isinstance(label, str):
        raise UnknownRoleException(label)
    try:
        return Role(label.strip().upper())
    except ValueError:
        raise UnknownRoleException(label) from None


def rank(role: Role | str) -> int:
    """Return the integer rank of a role (VIEWER=1 .. DEVELOPER=6).

    Raises:
        UnknownRoleException: If role is not one of the six roles.
    """
    return ROLE_RANKS[parse_role(role)]


def can_act_as_superior_of(actor_role: Role | str, target_role: Role | str) -> bool:
    """Return True when actor_role ranks at or above target_role.

    Peers may always see peers. Both labels are validated; an unknown label
    on either side raises instead of denying.
    """
    return rank(actor_role) >= rank(target_role)


class Permission(_ValuesMixin, str, Enum):
    """Coarse action permissions granted per role."""

    MANAGE_USERS = "manage_users"
    VIEW_USERS = "view_users"
    MANAGE_ORGANIZATIONS = "manage_organizations"
    CREATE_TESTS = "create_tests"
    EDIT_TESTS = "edit_tests"
    DELETE_TESTS = "delete_tests"
    VIEW_TESTS = "view_tests"
    APPROVE_TESTS = "approve_tests"
    GENERATE_REPORTS = "generate_reports"
    VIEW_ANALYTICS = "view_analytics"
    EXPORT_DATA = "export_data"
    VIEW_SYSTEM_LOGS = "view_system_logs"
    MANAGE_SETTINGS = "manage_settings"


ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = {
    Role.DEVELOPER: frozenset(Permission),
    Role.ADMIN: frozenset(Permission),
    Role.MANAGER: frozenset(
        {
            Permission.MANAGE_USERS,
            Permission.VIEW_USERS,
            Permission.CREATE_TESTS,
            Permission.EDIT_TESTS,
            Permission.DELETE_TESTS,
            Permission.VIEW_TESTS,
            Permission.APPROVE_TESTS,
            Permission.GENERATE_REPORTS,
            Permission.VIEW_ANALYTICS,
            Permission.EXPORT_DATA,
            Permission.MANAGE_SETTINGS,
        }
    ),
    Role.SUPERVISOR: frozenset(
        {
            Permission.VIEW_USERS,
            Permission.CREATE_TESTS,
            Permission.EDIT_TESTS,
            Permission.VIEW_TESTS,
            Permission.APPROVE_TESTS,
            Permission.GENERATE_REPORTS,
            Permission.VIEW_ANALYTICS,
            Permission.EXPORT_DATA,
        }
    ),
    Role.TECHNICIAN: frozenset(
        {
            Permission.CREATE_TESTS,
            Permission.EDIT_TESTS,
            Permission.VIEW_TESTS,
            Permission.GENERATE_REPORTS,
        }
    ),
    Role.VIEWER: frozenset({Permission.VIEW_TESTS, Permission.VIEW_ANALYTICS}),
}


def has_permission(role: Role | str, permission: Permission | str) -> bool:
    """Return whether role is granted permission.

    An unknown permission code is simply not granted; an unknown role raises.
    """
    granted = ROLE_PERMISSIONS[parse_role(role)]
    try:
        return Permission(permission) in granted
    except ValueError:
        return False
