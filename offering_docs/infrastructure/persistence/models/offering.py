"""Offering and organization membership ORM models (owned by the offerings service; read here)."""

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from offering_docs.infrastructure.persistence.database import Base
from offering_docs.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Offering(CuidMixin, TimestampMixin, Base):
    """Investment offering. Table: offering."""

    __tablename__ = "offering"

    organization_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)


class OrganizationMember(TimestampMixin, Base):
    """User membership and role within an organization. Table: organization_member."""

    __tablename__ = "organization_member"

    organization_id: Mapped[str] = mapped_column(String, primary_key=True)
    user_id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
    role: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "role IN ('viewer', 'editor', 'manager', 'owner')",
            name="ck_organization_member_role",
        ),
    )
