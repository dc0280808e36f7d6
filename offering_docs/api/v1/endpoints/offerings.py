"""Offering document routes: list, presign and confirm. Thin routes delegating to services."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from offering_docs.api.v1.dependencies import (
    CurrentUser,
    get_document_catalog_service,
    get_document_upload_service,
)
from offering_docs.application.use_cases.documents import (
    DocumentCatalogService,
    DocumentUploadService,
)
from offering_docs.core.limiter import limit_upload, limit_writes
from offering_docs.schemas.document import (
    ConfirmBody,
    DocumentEnvelope,
    DocumentListResponse,
    DocumentResponse,
    PresignBody,
    PresignResponse,
)

router = APIRouter()


@router.get("/{offering_id}/documents", response_model=DocumentListResponse)
async def list_documents(
    offering_id: str,
    user: CurrentUser,
    catalog: Annotated[DocumentCatalogService, Depends(get_document_catalog_service)],
    category: str | None = Query(None),
    visibility: str | None = Query(None),
    q: str | None = Query(None, max_length=255),
):
    """List an offering's documents, newest first. Any member."""
    documents = await catalog.list_documents(
        user.user_id,
        offering_id,
        category=category,
        visibility=visibility,
        query=q,
    )
    return DocumentListResponse(
        documents=[DocumentResponse.from_result(d) for d in documents],
        count=len(documents),
    )


@router.post("/{offering_id}/documents/presign", response_model=PresignResponse)
@limit_upload
async def presign_upload(
    request: Request,
    offering_id: str,
    body: PresignBody,
    user: CurrentUser,
    uploads: Annotated[DocumentUploadService, Depends(get_document_upload_service)],
):
    """Validate declared metadata and return a time-limited write URL. Editor or above."""
    result = await uploads.presign(user.user_id, offering_id, body.to_request())
    return PresignResponse.from_result(result)


@router.post(
    "/{offering_id}/documents/confirm",
    response_model=DocumentEnvelope,
    status_code=201,
)
@limit_writes
async def confirm_upload(
    request: Request,
    offering_id: str,
    body: ConfirmBody,
    user: CurrentUser,
    uploads: Annotated[DocumentUploadService, Depends(get_document_upload_service)],
):
    """Verify the transferred bytes and create the document. Editor or above."""
    document = await uploads.confirm(user.user_id, offering_id, body.to_request())
    return DocumentEnvelope(document=DocumentResponse.from_result(document))
