"""DTOs for organization use cases (no dependency on ORM)."""

from dataclasses import dataclass

from geolab.domain.enums import AccessLevel, OrganizationType


@dataclass(frozen=True)
class OrganizationResult:
    """Organization read-model (result of get_by_id, list_affiliates, etc.)."""

    id: int
    name: str
    organization_type: OrganizationType
    parent_organization_id: int | None = None
    access_level: AccessLevel = AccessLevel.ISOLATED
    is_active: bool = True


@dataclass(frozen=True)
class OrganizationCreate:
    """Input for creating an organization (validated by OrganizationService)."""

    name: str
    organization_type: OrganizationType
    parent_organization_id: int | None = None
    access_level: AccessLevel = AccessLevel.ISOLATED
