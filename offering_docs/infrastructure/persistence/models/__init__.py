"""Persistence models: ORM entities and mixins."""

from offering_docs.infrastructure.persistence.models.audit_log import AuditLog
from offering_docs.infrastructure.persistence.models.document import (
    UQ_OFFERING_CHECKSUM,
    Document,
)
from offering_docs.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OfferingScopedMixin,
    TimestampMixin,
)
from offering_docs.infrastructure.persistence.models.offering import (
    Offering,
    OrganizationMember,
)

__all__ = [
    "AuditLog",
    "Document",
    "Offering",
    "OrganizationMember",
    "UQ_OFFERING_CHECKSUM",
    "CuidMixin",
    "OfferingScopedMixin",
    "TimestampMixin",
]
