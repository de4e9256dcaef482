"""Security: identity token verification."""

from geolab.infrastructure.security.jwt import (
    create_access_token,
    create_identity_token,
    verify_token,
)

__all__ = ["create_access_token", "create_identity_token", "verify_token"]
