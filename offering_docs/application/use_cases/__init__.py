"""Application use cases: one entry point per workflow."""

from offering_docs.application.use_cases.documents import (
    DocumentCatalogService,
    DocumentUploadService,
    MigrateLegacyDocumentPathsUseCase,
)

__all__ = [
    "DocumentCatalogService",
    "DocumentUploadService",
    "MigrateLegacyDocumentPathsUseCase",
]
