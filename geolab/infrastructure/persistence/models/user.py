"""User ORM model. Table: app_user (role label + organization membership)."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from geolab.domain.enums import Role
from geolab.infrastructure.persistence.database import Base
from geolab.infrastructure.persistence.models.mixins import (
    ActiveMixin,
    IntegerIdMixin,
    TimestampMixin,
)


class User(IntegerIdMixin, TimestampMixin, ActiveMixin, Base):
    """Laboratory user. firebase_uid links to the identity provider subject.

    role is stored as a plain label without a check constraint so that
    legacy labels are read back unchanged and rejected by access checks.
    """

    __tablename__ = "app_user"

    firebase_uid: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default=Role.TECHNICIAN.value)
    organization_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("organization.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
