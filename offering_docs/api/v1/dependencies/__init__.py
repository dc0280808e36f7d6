"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
"""

from offering_docs.api.v1.dependencies.auth import (
    CurrentUser,
    get_authenticator,
    get_current_user,
)
from offering_docs.api.v1.dependencies.document import (
    get_access_gate,
    get_document_audit_service,
    get_document_catalog_service,
    get_document_upload_service,
    get_storage_config,
    get_storage_service,
)

__all__ = [
    "CurrentUser",
    "get_access_gate",
    "get_authenticator",
    "get_current_user",
    "get_document_audit_service",
    "get_document_catalog_service",
    "get_document_upload_service",
    "get_storage_config",
    "get_storage_service",
]
