"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from geolab.domain.entities.actor import Actor
from geolab.domain.entities.organization import OrganizationEntity

__all__ = ["Actor", "OrganizationEntity"]
