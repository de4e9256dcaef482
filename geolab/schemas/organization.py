"""Organization API schemas."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from geolab.domain.enums import AccessLevel, OrganizationType


class OrganizationResponse(BaseModel):
    """Organization as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    organization_type: OrganizationType
    parent_organization_id: int | None = None
    access_level: AccessLevel
    is_active: bool = True


class OrganizationCreateRequest(BaseModel):
    """Body for POST /organizations."""

    name: str = Field(..., min_length=1, max_length=255)
    organization_type: OrganizationType = OrganizationType.INDEPENDENT
    parent_organization_id: int | None = Field(default=None, ge=1)
    access_level: AccessLevel = AccessLevel.ISOLATED


class OrganizationUpdateRequest(BaseModel):
    """Body for PATCH /organizations/{id}. Only fields sent are changed."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    organization_type: OrganizationType | None = None
    parent_organization_id: int | None = Field(default=None, ge=1)
    access_level: AccessLevel | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def reject_null_required(self) -> "OrganizationUpdateRequest":
        """Only parent_organization_id may be explicitly set to null."""
        for field in ("name", "organization_type", "access_level", "is_active"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self
