"""Use cases: multi-step operations composed from repositories and services."""

from geolab.application.use_cases.user_listing import UserListingService

__all__ = ["UserListingService"]
