"""Document API schemas.

JSON uses camelCase field names; models accept snake_case too
(populate_by_name) so services and tests can build them directly.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from offering_docs.application.dtos.document import (
    ConfirmRequest,
    DocumentResult,
    PresignedUploadResult,
    PresignRequest,
    SignedUrlResult,
    UploadMetadata,
)

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PresignBody(BaseModel):
    """Request body for POST /offerings/{id}/documents/presign.

    Fields are optional here so missing values surface as NO_FILE or
    INVALID_CATEGORY instead of a generic validation error.
    """

    model_config = _camel

    filename: str | None = Field(default=None, max_length=1024)
    mime_type: str | None = Field(default=None, max_length=255)
    size: int | None = None
    title: str | None = Field(default=None, max_length=1024)
    category: str | None = None
    visibility: str | None = None

    def to_request(self) -> PresignRequest:
        return PresignRequest(
            filename=self.filename or "",
            mime_type=self.mime_type or "",
            size=self.size or 0,
            title=self.title,
            category=self.category,
            visibility=self.visibility,
        )


class ConfirmBody(BaseModel):
    """Request body for POST /offerings/{id}/documents/confirm (echo of presign metadata)."""

    model_config = _camel

    path: str | None = Field(default=None, max_length=2048)
    filename: str | None = Field(default=None, max_length=1024)
    mime_type: str | None = Field(default=None, max_length=255)
    size: int | None = None
    title: str | None = Field(default=None, max_length=1024)
    category: str | None = None
    visibility: str | None = None

    def to_request(self) -> ConfirmRequest:
        return ConfirmRequest(
            path=self.path or "",
            filename=self.filename or "",
            mime_type=self.mime_type or "",
            size=self.size or 0,
            title=self.title,
            category=self.category,
            visibility=self.visibility,
        )


class DocumentPatch(BaseModel):
    """Request body for PATCH /documents/{id}; omitted fields are unchanged."""

    title: str | None = Field(default=None, max_length=1024)
    category: str | None = None
    visibility: str | None = None


class DocumentResponse(BaseModel):
    """Document as returned by list, confirm and patch."""

    model_config = _camel

    id: str
    offering_id: str
    title: str
    filename: str
    mime_type: str
    size_bytes: int
    category: str
    visibility: str
    storage_key: str
    checksum_sha256: str
    download_count: int
    uploaded_by: str
    uploaded_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_result(cls, doc: DocumentResult) -> "DocumentResponse":
        return cls(
            id=doc.id,
            offering_id=doc.offering_id,
            title=doc.title,
            filename=doc.filename,
            mime_type=doc.mime_type,
            size_bytes=doc.size_bytes,
            category=doc.category.value,
            visibility=doc.visibility.value,
            storage_key=doc.storage_key,
            checksum_sha256=doc.checksum_sha256,
            download_count=doc.download_count,
            uploaded_by=doc.uploaded_by,
            uploaded_at=doc.uploaded_at,
            updated_at=doc.updated_at,
        )


class DocumentEnvelope(BaseModel):
    """Response for confirm (201) and patch: {document}."""

    document: DocumentResponse


class DocumentListResponse(BaseModel):
    """Response for GET /offerings/{id}/documents."""

    documents: list[DocumentResponse]
    count: int


class UploadMetadataResponse(BaseModel):
    """Metadata the client must echo back on confirm."""

    model_config = _camel

    offering_id: str
    title: str
    filename: str
    category: str
    visibility: str
    mime_type: str
    size: int

    @classmethod
    def from_metadata(cls, meta: UploadMetadata) -> "UploadMetadataResponse":
        return cls(
            offering_id=meta.offering_id,
            title=meta.title,
            filename=meta.filename,
            category=meta.category.value,
            visibility=meta.visibility.value,
            mime_type=meta.mime_type,
            size=meta.size,
        )


class PresignResponse(BaseModel):
    """Response for POST presign: {uploadUrl, token, path, expiresIn, metadata}."""

    model_config = _camel

    upload_url: str
    token: str
    path: str
    expires_in: int
    metadata: UploadMetadataResponse

    @classmethod
    def from_result(cls, result: PresignedUploadResult) -> "PresignResponse":
        return cls(
            upload_url=result.upload_url,
            token=result.token,
            path=result.path,
            expires_in=result.expires_in,
            metadata=UploadMetadataResponse.from_metadata(result.metadata),
        )


class SignedUrlResponse(BaseModel):
    """Response for POST view-url / download-url."""

    model_config = ConfigDict(from_attributes=True)

    signed_url: str
    expires_in: int
    expires_at: datetime
    download_count: int

    @classmethod
    def from_result(cls, result: SignedUrlResult) -> "SignedUrlResponse":
        return cls.model_validate(result)
