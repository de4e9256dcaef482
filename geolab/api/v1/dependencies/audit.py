"""Audit dependency for sensitive actions (logged to the geolab.audit logger)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from geolab.domain.entities.actor import Actor
from geolab.shared.telemetry.logging import get_audit_logger

from . import auth


def audit_action(action: str):
    """Dependency factory: log "AUDIT: <email> (<role>) performed <action> on <path>"."""

    async def _audit(
        request: Request,
        actor: Annotated[Actor, Depends(auth.get_current_actor)],
    ) -> Actor:
        get_audit_logger().info(
            "AUDIT: %s (%s) performed %s on %s",
            actor.email or "unknown",
            actor.role.value,
            action,
            request.url.path,
        )
        return actor

    return _audit
