"""ORM models. Import here so Base.metadata sees every table."""

from geolab.infrastructure.persistence.models.organization import Organization
from geolab.infrastructure.persistence.models.user import User

__all__ = ["Organization", "User"]
