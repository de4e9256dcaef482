"""Repositories: SQLAlchemy-backed implementations of application ports."""

from geolab.infrastructure.persistence.repositories.base import BaseRepository
from geolab.infrastructure.persistence.repositories.organization_repo import (
    OrganizationRepository,
)
from geolab.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = ["BaseRepository", "OrganizationRepository", "UserRepository"]
