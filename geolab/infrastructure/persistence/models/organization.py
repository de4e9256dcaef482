"""Organization ORM model. Self-referencing hierarchy (headquarters -> affiliates)."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from geolab.domain.enums import AccessLevel, OrganizationType
from geolab.infrastructure.persistence.database import Base
from geolab.infrastructure.persistence.models.mixins import (
    ActiveMixin,
    IntegerIdMixin,
    TimestampMixin,
)


def _in_values(column: str, values: list[str]) -> str:
    return "{} IN ({})".format(
        column, ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    )


class Organization(IntegerIdMixin, TimestampMixin, ActiveMixin, Base):
    """Laboratory organization. Table: organization.

    Only affiliates carry parent_organization_id; the parent being a
    headquarters is enforced by OrganizationService.
    """

    __tablename__ = "organization"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    organization_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrganizationType.INDEPENDENT.value
    )
    parent_organization_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("organization.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    access_level: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AccessLevel.ISOLATED.value
    )

    __table_args__ = (
        CheckConstraint(
            _in_values("organization_type", OrganizationType.values()),
            name="organization_type_check",
        ),
        CheckConstraint(
            _in_values("access_level", AccessLevel.values()),
            name="organization_access_level_check",
        ),
        CheckConstraint(
            "(organization_type = 'affiliate') = (parent_organization_id IS NOT NULL)",
            name="organization_parent_check",
        ),
    )
