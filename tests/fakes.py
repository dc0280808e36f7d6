"""In-memory doubles for storage and repositories used by unit and API tests."""

from __future__ import annotations

import dataclasses
from datetime import timedelta
from typing import Any

from offering_docs.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from offering_docs.application.dtos.document import (
    DocumentCreate,
    DocumentFilter,
    DocumentResult,
)
from offering_docs.application.dtos.offering import MembershipResult, OfferingResult
from offering_docs.application.interfaces.storage import PresignedUpload
from offering_docs.domain.enums import DocumentCategory, DocumentVisibility, OfferingRole
from offering_docs.domain.exceptions import DuplicateDocumentException
from offering_docs.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
)
from offering_docs.shared.utils.datetime import utc_now
from offering_docs.shared.utils.generators import generate_cuid


def pdf_bytes(body: bytes = b"hello") -> bytes:
    """Smallest byte string the validator accepts as a PDF."""
    return b"%PDF-1.7\n" + body + b"\n%%EOF\n"


class InMemoryStorage:
    """IStorageService over a dict. Records issued upload URLs."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.upload_urls: list[str] = []
        self.fail_delete = False

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        self.blobs[storage_ref] = file_data
        return {"storage_ref": storage_ref, "size": len(file_data)}

    async def download(self, storage_ref: str) -> bytes:
        if storage_ref not in self.blobs:
            raise StorageNotFoundError(storage_ref)
        return self.blobs[storage_ref]

    async def delete(self, storage_ref: str) -> bool:
        if self.fail_delete:
            raise StorageDeleteError(storage_ref, "simulated outage")
        return self.blobs.pop(storage_ref, None) is not None

    async def exists(self, storage_ref: str) -> bool:
        return storage_ref in self.blobs

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
        download: bool = False,
        filename: str | None = None,
    ) -> str:
        mode = "attachment" if download else "inline"
        return f"memory://{storage_ref}?mode={mode}&ttl={int(expiration.total_seconds())}"

    async def generate_upload_url(
        self,
        storage_ref: str,
        content_type: str,
        expiration: timedelta = timedelta(minutes=10),
    ) -> PresignedUpload:
        url = f"memory://upload/{storage_ref}"
        self.upload_urls.append(url)
        return PresignedUpload(url=url, token=f"tok-{len(self.upload_urls)}", path=storage_ref)


class InMemoryDocumentRepository:
    """IDocumentRepository with the (offering_id, checksum) uniqueness of the real table."""

    def __init__(self) -> None:
        self.documents: dict[str, DocumentResult] = {}
        # Hides rows from get_by_checksum to simulate a concurrent confirm.
        self.skip_checksum_lookup = False

    def add(self, doc: DocumentResult) -> DocumentResult:
        self.documents[doc.id] = doc
        return doc

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        return self.documents.get(document_id)

    async def get_by_checksum(self, offering_id: str, checksum_sha256: str) -> DocumentResult | None:
        if self.skip_checksum_lookup:
            return None
        for doc in self.documents.values():
            if doc.offering_id == offering_id and doc.checksum_sha256 == checksum_sha256:
                return doc
        return None

    async def get_by_storage_key(self, offering_id: str, storage_key: str) -> DocumentResult | None:
        for doc in self.documents.values():
            if doc.offering_id == offering_id and doc.storage_key == storage_key:
                return doc
        return None

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        for doc in self.documents.values():
            if doc.offering_id == data.offering_id and doc.checksum_sha256 == data.checksum_sha256:
                raise DuplicateDocumentException(
                    data.offering_id, data.checksum_sha256, doc.id, doc.title
                )
        result = DocumentResult(
            **dataclasses.asdict(data),
            download_count=0,
            uploaded_at=utc_now(),
        )
        self.documents[result.id] = result
        return result

    async def list_for_offering(self, offering_id: str, filters: DocumentFilter) -> list[DocumentResult]:
        docs = [d for d in self.documents.values() if d.offering_id == offering_id]
        if filters.category:
            docs = [d for d in docs if d.category == filters.category]
        if filters.visibility:
            docs = [d for d in docs if d.visibility == filters.visibility]
        if filters.query:
            q = filters.query.lower()
            docs = [d for d in docs if q in d.title.lower() or q in d.filename.lower()]
        return sorted(docs, key=lambda d: (d.uploaded_at, d.id), reverse=True)

    async def update_document(self, document_id: str, values: dict[str, object]) -> DocumentResult | None:
        doc = self.documents.get(document_id)
        if doc is None:
            return None
        changes = dict(values)
        if "category" in changes:
            changes["category"] = DocumentCategory(changes["category"])
        if "visibility" in changes:
            changes["visibility"] = DocumentVisibility(changes["visibility"])
        updated = dataclasses.replace(doc, **changes, updated_at=utc_now())
        self.documents[document_id] = updated
        return updated

    async def delete_document(self, document_id: str) -> bool:
        return self.documents.pop(document_id, None) is not None

    async def increment_download_count(self, document_id: str) -> int | None:
        doc = self.documents.get(document_id)
        if doc is None:
            return None
        updated = dataclasses.replace(doc, download_count=doc.download_count + 1)
        self.documents[document_id] = updated
        return updated.download_count

    async def update_storage_key(self, document_id: str, storage_key: str) -> None:
        doc = self.documents[document_id]
        self.documents[document_id] = dataclasses.replace(doc, storage_key=storage_key)

    async def list_all(self, offering_id: str | None = None) -> list[DocumentResult]:
        docs = [
            d for d in self.documents.values() if offering_id is None or d.offering_id == offering_id
        ]
        return sorted(docs, key=lambda d: (d.uploaded_at, d.id))


class InMemoryOfferingRepository:
    """IOfferingRepository over dicts."""

    def __init__(self) -> None:
        self.offerings: dict[str, OfferingResult] = {}
        self.members: dict[tuple[str, str], MembershipResult] = {}

    def add_offering(self, offering_id: str, organization_id: str, name: str = "Offering") -> None:
        self.offerings[offering_id] = OfferingResult(offering_id, organization_id, name)

    def add_member(self, organization_id: str, user_id: str, role: OfferingRole) -> None:
        self.members[(organization_id, user_id)] = MembershipResult(organization_id, user_id, role)

    async def get_offering(self, offering_id: str) -> OfferingResult | None:
        return self.offerings.get(offering_id)

    async def get_membership(self, organization_id: str, user_id: str) -> MembershipResult | None:
        return self.members.get((organization_id, user_id))


class InMemoryAuditLogRepository:
    """IAuditLogRepository collecting entries; fail=True makes every write raise."""

    def __init__(self) -> None:
        self.entries: list[AuditLogResult] = []
        self.fail = False

    async def create(self, data: AuditLogEntryCreate) -> AuditLogResult:
        if self.fail:
            raise RuntimeError("audit store unavailable")
        result = AuditLogResult(
            id=generate_cuid(),
            timestamp=utc_now(),
            **dataclasses.asdict(data),
        )
        self.entries.append(result)
        return result

    def actions(self) -> list[str]:
        return [e.action for e in self.entries]


def make_document(
    offering_id: str = "off_1",
    storage_key: str | None = None,
    filename: str = "1700000000000_report_abc123.pdf",
    checksum: str = "0" * 64,
    **overrides: Any,
) -> DocumentResult:
    """DocumentResult as if it had been confirmed earlier."""
    fields: dict[str, Any] = {
        "id": generate_cuid(),
        "offering_id": offering_id,
        "title": "Report",
        "filename": filename,
        "mime_type": "application/pdf",
        "size_bytes": 100,
        "category": DocumentCategory.FINANCIAL,
        "visibility": DocumentVisibility.PRIVATE,
        "storage_key": storage_key or f"{offering_id}/Documents/{filename}",
        "checksum_sha256": checksum,
        "download_count": 0,
        "uploaded_by": "editor-1",
        "uploaded_at": utc_now(),
    }
    fields.update(overrides)
    return DocumentResult(**fields)
