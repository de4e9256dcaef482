"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, list_users, etc.).

    role is the stored label as-is; access checks validate it, so a corrupt
    label surfaces as UnknownRoleException instead of being mapped silently.
    """

    id: int
    firebase_uid: str
    email: str
    name: str
    role: str
    organization_id: int | None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
