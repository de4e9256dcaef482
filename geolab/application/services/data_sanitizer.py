"""Role-based response sanitization.

Lower roles see less: bookkeeping fields, then organization internals, then
system diagnostics are dropped. DEVELOPER sees everything.
"""

from typing import Any

from geolab.domain.enums import Role
from geolab.domain.roles import rank

_VIEWER_HIDDEN = frozenset({"created_at", "updated_at", "created_by", "user_id", "firebase_uid"})
_TECHNICIAN_HIDDEN = frozenset({"organization_id", "internal_id"})
_BELOW_ADMIN_HIDDEN = frozenset({"system_config", "debug_info", "raw_data"})


def hidden_fields_for_role(role: Role | str) -> frozenset[str]:
    """Return the field names removed for role (empty for DEVELOPER)."""
    level = rank(role)
    if level >= rank(Role.DEVELOPER):
        return frozenset()
    hidden: set[str] = set()
    if level <= rank(Role.VIEWER):
        hidden |= _VIEWER_HIDDEN
    if level <= rank(Role.TECHNICIAN):
        hidden |= _TECHNICIAN_HIDDEN
    if level < rank(Role.ADMIN):
        hidden |= _BELOW_ADMIN_HIDDEN
    return frozenset(hidden)


def sanitize_for_role(data: Any, role: Role | str) -> Any:
    """Return a copy of data with fields hidden for role removed.

    Recurses into dicts and lists; other values are returned as-is. The
    input is never modified.

    Raises:
        UnknownRoleException: If role is not one of the six roles.
    """
    hidden = hidden_fields_for_role(role)
    if not hidden:
        return data
    return _strip(data, hidden)


def _strip(data: Any, hidden: frozenset[str]) -> Any:
    if isinstance(data, dict):
        return {k: _strip(v, hidden) for k, v in data.items() if k not in hidden}
    if isinstance(data, list):
        return [_strip(item, hidden) for item in data]
    return data
