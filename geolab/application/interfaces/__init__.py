"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from geolab.infrastructure or geolab.api.
"""

from geolab.application.interfaces.repositories import (
    IOrganizationDirectory,
    IOrganizationRepository,
    IUserRepository,
)
from geolab.application.interfaces.services import IAccessTarget, ICacheService

__all__ = [
    "IAccessTarget",
    "ICacheService",
    "IOrganizationDirectory",
    "IOrganizationRepository",
    "IUserRepository",
]
