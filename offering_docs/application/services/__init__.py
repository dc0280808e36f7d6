"""Application services: access gate, path layout, validation, fallback, dedup, audit."""

from offering_docs.application.services.authorization_service import AuthorizationService
from offering_docs.application.services.dedup_index import DedupIndex, sha256_hex
from offering_docs.application.services.document_audit_service import (
    DocumentAuditService,
)
from offering_docs.application.services.document_content_validator import (
    DocumentContentValidator,
)
from offering_docs.application.services.storage_fallback import (
    FallbackResult,
    StorageBlobLocator,
    try_in_order,
)
from offering_docs.application.services.storage_paths import (
    DocumentStorageConfig,
    StoragePathResolver,
)

__all__ = [
    "AuthorizationService",
    "DedupIndex",
    "DocumentAuditService",
    "DocumentContentValidator",
    "DocumentStorageConfig",
    "FallbackResult",
    "StorageBlobLocator",
    "StoragePathResolver",
    "sha256_hex",
    "try_in_order",
]
