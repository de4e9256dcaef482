"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services and shared types
consumed by them (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol

from geolab.domain.enums import Role


# Anything an access check can be run against (UserResult, Actor, ...)
class IAccessTarget(Protocol):
    """A user-like value carrying a role label and an organization id."""

    @property
    def role(self) -> Role | str: ...

    @property
    def organization_id(self) -> int | None: ...


# Cache service interface
class ICacheService(Protocol):
    """Minimal cache protocol for organization record caching (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""
