"""Application DTOs (no ORM dependency)."""

from offering_docs.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from offering_docs.application.dtos.document import (
    ConfirmRequest,
    DocumentContent,
    DocumentCreate,
    DocumentFilter,
    DocumentResult,
    DocumentUpdate,
    LegacyMigrationReport,
    PresignedUploadResult,
    PresignRequest,
    SignedUrlResult,
    UploadMetadata,
)
from offering_docs.application.dtos.offering import MembershipResult, OfferingResult

__all__ = [
    "AuditLogEntryCreate",
    "AuditLogResult",
    "ConfirmRequest",
    "DocumentContent",
    "DocumentCreate",
    "DocumentFilter",
    "DocumentResult",
    "DocumentUpdate",
    "LegacyMigrationReport",
    "MembershipResult",
    "OfferingResult",
    "PresignRequest",
    "PresignedUploadResult",
    "SignedUrlResult",
    "UploadMetadata",
]
