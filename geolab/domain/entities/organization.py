"""Organization domain entity.

Represents a laboratory organization and its place in the hierarchy,
independent of persistence.
"""

from dataclasses import dataclass

from geolab.domain.enums import AccessLevel, OrganizationType
from geolab.domain.exceptions import ValidationException


@dataclass
class OrganizationEntity:
    """Domain entity for an organization.

    Checks the local shape rules on construction: only affiliates carry a
    parent, and an affiliate is never its own parent. Whether the parent is
    a headquarters needs the directory and is checked by OrganizationService.
    """

    id: int | None
    name: str
    organization_type: OrganizationType
    parent_organization_id: int | None = None
    access_level: AccessLevel = AccessLevel.ISOLATED

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate organization shape. Raises ValidationException if invalid."""
        if not self.name or not self.name.strip():
            raise ValidationException("Organization name is required", field="name")
        if self.organization_type == OrganizationType.AFFILIATE:
            if self.parent_organization_id is None:
                raise ValidationException(
                    "Affiliate requires a parent organization",
                    field="parent_organization_id",
                )
            if self.id is not None and self.parent_organization_id == self.id:
                raise ValidationException(
                    "Organization cannot be its own parent",
                    field="parent_organization_id",
                )
        elif self.parent_organization_id is not None:
            raise ValidationException(
                f"{self.organization_type.value} organization cannot have a parent",
                field="parent_organization_id",
            )

    def is_headquarters(self) -> bool:
        return self.organization_type == OrganizationType.HEADQUARTERS
