"""Persistence repositories. Re-exports for dependency injection."""

from offering_docs.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from offering_docs.infrastructure.persistence.repositories.base import BaseRepository
from offering_docs.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from offering_docs.infrastructure.persistence.repositories.offering_repo import (
    OfferingRepository,
)

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "DocumentRepository",
    "OfferingRepository",
]
