"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from offering_docs.domain.enums import (
    DocumentAuditAction,
    DocumentCategory,
    DocumentVisibility,
    OfferingRole,
    Permission,
    UploadState,
)
from offering_docs.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DocumentStoreException,
    DuplicateDocumentException,
    FileTooLargeException,
    OfferingDocsException,
    ResourceNotFoundException,
    UnsupportedFileTypeException,
    ValidationException,
)

__all__ = [
    # Enums
    "DocumentAuditAction",
    "DocumentCategory",
    "DocumentVisibility",
    "OfferingRole",
    "Permission",
    "UploadState",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "DocumentStoreException",
    "DuplicateDocumentException",
    "FileTooLargeException",
    "OfferingDocsException",
    "ResourceNotFoundException",
    "UnsupportedFileTypeException",
    "ValidationException",
]
