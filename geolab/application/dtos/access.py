"""DTOs for access decisions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an access check. Derived on demand, never persisted.

    reason is for logs only and must not be returned to clients.
    """

    allowed: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.allowed
