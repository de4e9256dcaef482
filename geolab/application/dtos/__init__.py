"""Application DTOs: plain read-models and inputs shared across layers."""

from geolab.application.dtos.access import AccessDecision
from geolab.application.dtos.organization import OrganizationCreate, OrganizationResult
from geolab.application.dtos.user import UserResult

__all__ = ["AccessDecision", "OrganizationCreate", "OrganizationResult", "UserResult"]
