"""Document routes: edit, delete, signed URLs and proxied download."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from offering_docs.api.v1.dependencies import (
    CurrentUser,
    get_document_catalog_service,
)
from offering_docs.application.use_cases.documents import DocumentCatalogService
from offering_docs.core.limiter import limit_writes
from offering_docs.schemas.document import (
    DocumentEnvelope,
    DocumentPatch,
    DocumentResponse,
    SignedUrlResponse,
)

router = APIRouter()

Catalog = Annotated[DocumentCatalogService, Depends(get_document_catalog_service)]


@router.patch("/{document_id}", response_model=DocumentEnvelope)
@limit_writes
async def update_document(
    request: Request,
    document_id: str,
    body: DocumentPatch,
    user: CurrentUser,
    catalog: Catalog,
):
    """Change title, category or visibility. Editor or above."""
    document = await catalog.update_document(
        user.user_id,
        document_id,
        title=body.title,
        category=body.category,
        visibility=body.visibility,
    )
    return DocumentEnvelope(document=DocumentResponse.from_result(document))


@router.delete("/{document_id}", status_code=204)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    user: CurrentUser,
    catalog: Catalog,
) -> Response:
    """Delete blob and row. Manager or above; 204 also when already gone."""
    await catalog.delete_document(user.user_id, document_id)
    return Response(status_code=204)


@router.post("/{document_id}/view-url", response_model=SignedUrlResponse)
async def create_view_url(document_id: str, user: CurrentUser, catalog: Catalog):
    """Signed URL for inline viewing."""
    result = await catalog.view_url(user.user_id, document_id)
    return SignedUrlResponse.from_result(result)


@router.post("/{document_id}/download-url", response_model=SignedUrlResponse)
async def create_download_url(document_id: str, user: CurrentUser, catalog: Catalog):
    """Signed URL that downloads as an attachment."""
    result = await catalog.download_url(user.user_id, document_id)
    return SignedUrlResponse.from_result(result)


@router.get("/{document_id}/download")
async def download_document(
    document_id: str, user: CurrentUser, catalog: Catalog
) -> Response:
    """Stream the PDF through the API."""
    content = await catalog.download(user.user_id, document_id)
    return Response(
        content=content.data,
        media_type=content.mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="{content.filename}"',
            "Cache-Control": "private, max-age=0",
        },
    )
