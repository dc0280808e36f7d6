"""Document ORM model. PDF metadata and blob key per offering."""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from offering_docs.infrastructure.persistence.database import Base
from offering_docs.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OfferingScopedMixin,
)

# Name is matched when translating unique violations into duplicate errors.
UQ_OFFERING_CHECKSUM = "uq_document_offering_checksum"


class Document(CuidMixin, OfferingScopedMixin, Base):
    """Document entity. Table: document. One row per (offering_id, checksum_sha256)."""

    __tablename__ = "document"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String, nullable=False)
    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    visibility: Mapped[str] = mapped_column(String, nullable=False)
    storage_key: Mapped[str] = mapped_column(String, nullable=False)
    checksum_sha256: Mapped[str] = mapped_column(String(64), nullable=False)
    download_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    uploaded_by: Mapped[str] = mapped_column(String, nullable=False, index=True)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index(UQ_OFFERING_CHECKSUM, "offering_id", "checksum_sha256", unique=True),
        Index("ix_document_offering_uploaded_at", "offering_id", "uploaded_at"),
        Index("ix_document_offering_storage_key", "offering_id", "storage_key"),
        CheckConstraint(
            "category IN ('Financial', 'Appraisal', 'Legal', 'Technical', 'Other')",
            name="ck_document_category",
        ),
        CheckConstraint(
            "visibility IN ('Public', 'Private')", name="ck_document_visibility"
        ),
        CheckConstraint("download_count >= 0", name="ck_document_download_count"),
    )
