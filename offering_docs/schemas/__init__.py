"""Pydantic request/response schemas for the API."""

from offering_docs.schemas.document import (
    ConfirmBody,
    DocumentEnvelope,
    DocumentListResponse,
    DocumentPatch,
    DocumentResponse,
    PresignBody,
    PresignResponse,
    SignedUrlResponse,
    UploadMetadataResponse,
)
from offering_docs.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

__all__ = [
    "ConfirmBody",
    "DocumentEnvelope",
    "DocumentListResponse",
    "DocumentPatch",
    "DocumentResponse",
    "HealthResponse",
    "PresignBody",
    "PresignResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SignedUrlResponse",
    "UploadMetadataResponse",
]
