"""Document dependencies (composition root).

Storage service and DocumentStorageConfig are built once in create_app();
repositories and services are built per request on the request's session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from offering_docs.application.interfaces.storage import IStorageService
from offering_docs.application.services import (
    AuthorizationService,
    DocumentAuditService,
    DocumentStorageConfig,
)
from offering_docs.application.use_cases.documents import (
    DocumentCatalogService,
    DocumentUploadService,
)
from offering_docs.infrastructure.persistence.database import get_db_transactional
from offering_docs.infrastructure.persistence.repositories import (
    AuditLogRepository,
    DocumentRepository,
    OfferingRepository,
)


def get_storage_service(request: Request) -> IStorageService:
    """Single storage service instance for the app."""
    return request.app.state.storage


def get_storage_config(request: Request) -> DocumentStorageConfig:
    """Bucket, prefix, size ceiling and URL lifetimes."""
    return request.app.state.storage_config


async def get_access_gate(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AuthorizationService:
    """Per-offering role check backed by organization membership."""
    return AuthorizationService(OfferingRepository(db))


async def get_document_audit_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DocumentAuditService:
    """Best-effort audit writer sharing the request session; tags entries with the request id."""
    request_id = getattr(request.state, "request_id", None)
    return DocumentAuditService(AuditLogRepository(db), request_id=request_id)


async def get_document_upload_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
    config: Annotated[DocumentStorageConfig, Depends(get_storage_config)],
    access_gate: Annotated[AuthorizationService, Depends(get_access_gate)],
    audit: Annotated[DocumentAuditService, Depends(get_document_audit_service)],
) -> DocumentUploadService:
    """Build DocumentUploadService (presign + confirm)."""
    return DocumentUploadService(
        storage_service=storage,
        document_repo=DocumentRepository(db),
        access_gate=access_gate,
        audit=audit,
        config=config,
    )


async def get_document_catalog_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
    config: Annotated[DocumentStorageConfig, Depends(get_storage_config)],
    access_gate: Annotated[AuthorizationService, Depends(get_access_gate)],
    audit: Annotated[DocumentAuditService, Depends(get_document_audit_service)],
) -> DocumentCatalogService:
    """Build DocumentCatalogService (list, patch, delete, signed URLs, proxied download)."""
    return DocumentCatalogService(
        storage_service=storage,
        document_repo=DocumentRepository(db),
        access_gate=access_gate,
        audit=audit,
        config=config,
    )
