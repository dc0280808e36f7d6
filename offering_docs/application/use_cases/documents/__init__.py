"""Document use cases: two-phase upload, catalog access, and legacy path migration."""

from offering_docs.application.use_cases.documents.document_catalog import (
    DocumentCatalogService,
)
from offering_docs.application.use_cases.documents.migrate_legacy_paths import (
    MigrateLegacyDocumentPathsUseCase,
)
from offering_docs.application.use_cases.documents.upload_coordinator import (
    DocumentUploadService,
    build_storage_filename,
    sanitize_filename,
)

__all__ = [
    "DocumentCatalogService",
    "DocumentUploadService",
    "MigrateLegacyDocumentPathsUseCase",
    "build_storage_filename",
    "sanitize_filename",
]
