"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, storage, audit).
"""

from offering_docs.application.interfaces import (
    IAccessGate,
    IAuditLogRepository,
    IAuthenticator,
    IDocumentAuditService,
    IDocumentRepository,
    IOfferingRepository,
    IStorageService,
)
from offering_docs.application.services import (
    AuthorizationService,
    DocumentAuditService,
    DocumentStorageConfig,
    StoragePathResolver,
)
from offering_docs.application.use_cases import (
    DocumentCatalogService,
    DocumentUploadService,
    MigrateLegacyDocumentPathsUseCase,
)

__all__ = [
    "AuthorizationService",
    "DocumentAuditService",
    "DocumentCatalogService",
    "DocumentStorageConfig",
    "DocumentUploadService",
    "IAccessGate",
    "IAuditLogRepository",
    "IAuthenticator",
    "IDocumentAuditService",
    "IDocumentRepository",
    "IOfferingRepository",
    "IStorageService",
    "MigrateLegacyDocumentPathsUseCase",
    "StoragePathResolver",
]
