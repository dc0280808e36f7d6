"""Application interfaces (ports): repository, storage and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from offering_docs.infrastructure or offering_docs.api.
"""

from offering_docs.application.interfaces.repositories import (
    IAuditLogRepository,
    IDocumentRepository,
    IOfferingRepository,
)
from offering_docs.application.interfaces.services import (
    AuthenticatedUser,
    IAccessGate,
    IAuthenticator,
    IDocumentAuditService,
)
from offering_docs.application.interfaces.storage import IStorageService, PresignedUpload

__all__ = [
    "AuthenticatedUser",
    "IAccessGate",
    "IAuditLogRepository",
    "IAuthenticator",
    "IDocumentAuditService",
    "IDocumentRepository",
    "IOfferingRepository",
    "IStorageService",
    "PresignedUpload",
]
