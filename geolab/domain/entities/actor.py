"""Actor: the authenticated caller, built once at the identity boundary."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from geolab.domain.enums import Role
from geolab.domain.exceptions import AuthenticationException
from geolab.domain.roles import parse_role


@dataclass(frozen=True)
class Actor:
    """Validated caller identity passed explicitly into every access check.

    role is always a canonical Role; organization_id is None when the
    caller belongs to no organization (which denies every organization check).
    """

    uid: str
    role: Role
    organization_id: int | None
    email: str | None = None

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "Actor":
        """Build an Actor from verified identity claims.

        Expects sub, role, and optionally email and organization_id.

        Raises:
            AuthenticationException: If sub is missing or organization_id is
                not an integer.
            UnknownRoleException: If role is not one of the six roles.
        """
        uid = claims.get("sub")
        if not uid:
            raise AuthenticationException("Token missing subject")
        role = parse_role(claims.get("role"))
        raw_org = claims.get("organization_id")
        if raw_org is None:
            organization_id = None
        elif isinstance(raw_org, int) and not isinstance(raw_org, bool):
            organization_id = raw_org
        elif isinstance(raw_org, str) and raw_org.strip().isdigit():
            organization_id = int(raw_org)
        else:
            raise AuthenticationException("Invalid organization claim")
        return cls(
            uid=str(uid),
            role=role,
            organization_id=organization_id,
            email=claims.get("email"),
        )
