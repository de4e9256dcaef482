"""Identity dependencies: bearer token -> validated Actor (built once per request)."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from geolab.domain.entities.actor import Actor
from geolab.domain.exceptions import AuthenticationException
from geolab.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_actor_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Actor | None:
    """Return the actor from the bearer token if present; else None.

    An invalid token is treated as absent. An unknown role label in a valid
    token raises UnknownRoleException.
    """
    if not credentials:
        return None
    try:
        claims = verify_token(credentials.credentials)
    except ValueError as e:
        logger.debug("Rejected bearer token: %s", e)
        return None
    return Actor.from_claims(claims)


async def get_current_actor(
    actor: Annotated[Actor | None, Depends(get_current_actor_optional)],
) -> Actor:
    """Return the authenticated actor; raise 401 if missing or invalid."""
    if actor is None:
        raise AuthenticationException("Not authenticated")
    return actor
