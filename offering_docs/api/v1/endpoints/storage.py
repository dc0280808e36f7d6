"""Local blob transfer routes, the stand-in for presigned URLs when STORAGE_BACKEND=local.

Tokens are issued by LocalStorageService; upload tokens are single-use and
bound to one key and content type.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from offering_docs.api.v1.dependencies import get_storage_config, get_storage_service
from offering_docs.application.interfaces.storage import IStorageService
from offering_docs.application.services import DocumentStorageConfig
from offering_docs.application.services.document_content_validator import PDF_MIME_TYPE
from offering_docs.domain.exceptions import FileTooLargeException
from offering_docs.infrastructure.exceptions import StorageTokenError
from offering_docs.infrastructure.external.storage.local_storage import LocalStorageService
from offering_docs.shared.utils.sanitization import InputSanitizer

logger = logging.getLogger(__name__)

router = APIRouter()


def get_local_storage(
    storage: Annotated[IStorageService, Depends(get_storage_service)],
) -> LocalStorageService:
    """Local backend only; other backends hand out their own URLs."""
    if not isinstance(storage, LocalStorageService):
        raise HTTPException(status_code=404, detail="Not Found")
    return storage


@router.put("/upload/{token}")
async def upload_blob(
    token: str,
    request: Request,
    storage: Annotated[LocalStorageService, Depends(get_local_storage)],
    config: Annotated[DocumentStorageConfig, Depends(get_storage_config)],
):
    """Accept the raw bytes of a presigned upload."""
    data = await request.body()
    if len(data) > config.max_file_size:
        raise FileTooLargeException(len(data), config.max_file_size)
    try:
        grant = storage.consume_upload_token(token, request.headers.get("content-type"))
    except StorageTokenError as exc:
        logger.warning("Rejected local upload: %s", exc.message)
        raise
    result = await storage.upload(data, grant.storage_ref, grant.content_type)
    return {"path": grant.storage_ref, "size": result["size"]}


@router.get("/download/{token}")
async def download_blob(
    token: str,
    storage: Annotated[LocalStorageService, Depends(get_local_storage)],
) -> Response:
    """Serve bytes for a signed view or download URL."""
    grant = storage.validate_download_token(token)
    if grant is None:
        logger.warning("Rejected local download with unknown or expired token")
        raise StorageTokenError("unknown or expired download token")
    data = await storage.download(grant.storage_ref)
    disposition = "attachment" if grant.download else "inline"
    if grant.filename:
        disposition = f'{disposition}; filename="{InputSanitizer.header_filename(grant.filename)}"'
    return Response(
        content=data,
        media_type=PDF_MIME_TYPE,
        headers={
            "Content-Disposition": disposition,
            "Cache-Control": "private, max-age=0",
        },
    )
