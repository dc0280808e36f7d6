"""DTOs for document use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from offering_docs.domain.enums import DocumentCategory, DocumentVisibility


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document record (write-model). Use case builds this; repo persists and returns DocumentResult."""

    id: str
    offering_id: str
    title: str
    filename: str
    mime_type: str
    size_bytes: int
    category: DocumentCategory
    visibility: DocumentVisibility
    storage_key: str
    checksum_sha256: str
    uploaded_by: str


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (result of get_by_id, list, create, update)."""

    id: str
    offering_id: str
    title: str
    filename: str
    mime_type: str
    size_bytes: int
    category: DocumentCategory
    visibility: DocumentVisibility
    storage_key: str
    checksum_sha256: str
    download_count: int
    uploaded_by: str
    uploaded_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DocumentUpdate:
    """Partial update of mutable document fields; None means unchanged."""

    title: str | None = None
    category: DocumentCategory | None = None
    visibility: DocumentVisibility | None = None

    def is_empty(self) -> bool:
        return self.title is None and self.category is None and self.visibility is None

    def as_values(self) -> dict[str, object]:
        """Column values to write, omitting unchanged fields."""
        values: dict[str, object] = {}
        if self.title is not None:
            values["title"] = self.title
        if self.category is not None:
            values["category"] = self.category.value
        if self.visibility is not None:
            values["visibility"] = self.visibility.value
        return values


@dataclass(frozen=True)
class DocumentFilter:
    """Normalized list filters. None means no filtering on that field."""

    category: DocumentCategory | None = None
    visibility: DocumentVisibility | None = None
    query: str | None = None


@dataclass(frozen=True)
class PresignRequest:
    """Client-declared metadata for a presigned upload."""

    filename: str
    mime_type: str
    size: int
    title: str | None = None
    category: str | None = None
    visibility: str | None = None


@dataclass(frozen=True)
class UploadMetadata:
    """Metadata echoed by presign and sent back on confirm."""

    offering_id: str
    title: str
    filename: str
    category: DocumentCategory
    visibility: DocumentVisibility
    mime_type: str
    size: int


@dataclass(frozen=True)
class PresignedUploadResult:
    """Result of presign: write URL, its token, target path and echoed metadata."""

    upload_url: str
    token: str
    path: str
    expires_in: int
    metadata: UploadMetadata


@dataclass(frozen=True)
class ConfirmRequest:
    """Client confirmation that the presigned transfer finished."""

    path: str
    filename: str
    mime_type: str
    size: int
    title: str | None = None
    category: str | None = None
    visibility: str | None = None


@dataclass(frozen=True)
class SignedUrlResult:
    """Time-limited read URL plus the post-increment download count."""

    signed_url: str
    expires_in: int
    expires_at: datetime
    download_count: int


@dataclass(frozen=True)
class DocumentContent:
    """Bytes of a document plus the header-safe name to serve it under."""

    data: bytes
    filename: str
    mime_type: str
    download_count: int


@dataclass(frozen=True)
class LegacyMigrationReport:
    """Outcome of a legacy storage path migration run."""

    scanned: int = 0
    migrated: list[str] = field(default_factory=list)
    already_canonical: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
