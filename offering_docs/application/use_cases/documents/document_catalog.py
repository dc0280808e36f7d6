"""Document catalog: listing, metadata edits, deletion and read access."""

from __future__ import annotations

import logging
from datetime import timedelta

from offering_docs.application.dtos.document import (
    DocumentContent,
    DocumentFilter,
    DocumentResult,
    DocumentUpdate,
    SignedUrlResult,
)
from offering_docs.application.interfaces.repositories import IDocumentRepository
from offering_docs.application.interfaces.services import (
    IAccessGate,
    IDocumentAuditService,
)
from offering_docs.application.interfaces.storage import IStorageService
from offering_docs.application.services.storage_fallback import StorageBlobLocator
from offering_docs.application.services.storage_paths import (
    DocumentStorageConfig,
    StoragePathResolver,
)
from offering_docs.application.use_cases.documents.upload_coordinator import (
    parse_category,
    parse_visibility,
)
from offering_docs.domain.enums import (
    DocumentAuditAction,
    DocumentCategory,
    DocumentVisibility,
    Permission,
)
from offering_docs.domain.exceptions import (
    ResourceNotFoundException,
    ValidationException,
)
from offering_docs.infrastructure.exceptions import StorageException
from offering_docs.shared.utils.datetime import expires_at
from offering_docs.shared.utils.sanitization import InputSanitizer, sanitize_title

logger = logging.getLogger(__name__)


class DocumentCatalogService:
    """Read and maintenance operations on stored documents.

    Every blob access resolves through StorageBlobLocator so documents still
    stored under legacy keys behave exactly like current ones.
    """

    def __init__(
        self,
        storage_service: IStorageService,
        document_repo: IDocumentRepository,
        access_gate: IAccessGate,
        audit: IDocumentAuditService,
        config: DocumentStorageConfig,
    ) -> None:
        self.document_repo = document_repo
        self.access_gate = access_gate
        self.audit = audit
        self.config = config
        self.locator = StorageBlobLocator(storage_service, StoragePathResolver(config))

    async def _get_document(self, document_id: str) -> DocumentResult:
        doc = await self.document_repo.get_by_id(document_id)
        if doc is None:
            raise ResourceNotFoundException("document", document_id)
        return doc

    async def list_documents(
        self,
        user_id: str,
        offering_id: str,
        category: str | None = None,
        visibility: str | None = None,
        query: str | None = None,
    ) -> list[DocumentResult]:
        """Return the offering's documents, newest first.

        Filters match case-insensitively; unrecognized filter values are ignored.
        """
        await self.access_gate.authorize(user_id, offering_id, Permission.READ)
        filters = DocumentFilter(
            category=DocumentCategory.normalize(category),
            visibility=DocumentVisibility.normalize(visibility),
            query=(query or "").strip() or None,
        )
        documents = await self.document_repo.list_for_offering(offering_id, filters)
        await self.audit.record(
            DocumentAuditAction.LIST,
            user_id,
            offering_id=offering_id,
            metadata={
                "count": len(documents),
                "category": filters.category.value if filters.category else None,
                "visibility": filters.visibility.value if filters.visibility else None,
                "query": filters.query,
            },
        )
        return documents

    async def update_document(
        self,
        user_id: str,
        document_id: str,
        title: str | None = None,
        category: str | None = None,
        visibility: str | None = None,
    ) -> DocumentResult:
        """Change title, category or visibility; at least one must be given."""
        doc = await self._get_document(document_id)
        await self.access_gate.authorize(user_id, doc.offering_id, Permission.WRITE)

        clean_title = None
        if title is not None:
            clean_title = sanitize_title(title)
            if not clean_title:
                raise ValidationException(
                    "Title must not be empty", field="title", error_code="INVALID_TITLE"
                )
        update = DocumentUpdate(
            title=clean_title,
            category=parse_category(category) if category is not None else None,
            visibility=parse_visibility(visibility) if visibility is not None else None,
        )
        if update.is_empty():
            raise ValidationException("No fields to update", error_code="NO_UPDATES")

        updated = await self.document_repo.update_document(document_id, update.as_values())
        if updated is None:
            raise ResourceNotFoundException("document", document_id)
        await self.audit.record(
            DocumentAuditAction.EDIT,
            user_id,
            document_id=document_id,
            offering_id=doc.offering_id,
            metadata={"changes": update.as_values()},
        )
        return updated

    async def delete_document(self, user_id: str, document_id: str) -> None:
        """Remove the blob (best effort) and the row. Absent documents are a no-op."""
        doc = await self.document_repo.get_by_id(document_id)
        if doc is None:
            logger.info("Delete of absent document %s treated as done", document_id)
            return
        await self.access_gate.authorize(user_id, doc.offering_id, Permission.DELETE)

        try:
            await self.locator.delete(doc.storage_key)
        except StorageException as exc:
            logger.warning(
                "Blob delete failed for document %s (key %s): %s",
                document_id,
                doc.storage_key,
                exc,
            )
        await self.document_repo.delete_document(document_id)
        await self.audit.record(
            DocumentAuditAction.DELETE,
            user_id,
            document_id=document_id,
            offering_id=doc.offering_id,
            metadata={"filename": doc.filename, "storage_key": doc.storage_key},
        )

    async def _signed_url(
        self, user_id: str, document_id: str, download: bool
    ) -> SignedUrlResult:
        doc = await self._get_document(document_id)
        await self.access_gate.authorize(user_id, doc.offering_id, Permission.READ)
        ttl = self.config.signed_url_ttl_seconds
        result = await self.locator.create_signed_url(
            doc.storage_key,
            expiration=timedelta(seconds=ttl),
            download=download,
            filename=InputSanitizer.header_filename(doc.filename) if download else None,
        )
        count = await self.document_repo.increment_download_count(document_id)
        if count is None:
            raise ResourceNotFoundException("document", document_id)
        await self.audit.record(
            DocumentAuditAction.DOWNLOAD if download else DocumentAuditAction.VIEW,
            user_id,
            document_id=document_id,
            offering_id=doc.offering_id,
            metadata={"path": result.actual_path, "legacy": result.is_legacy},
        )
        return SignedUrlResult(
            signed_url=result.value,
            expires_in=ttl,
            expires_at=expires_at(ttl),
            download_count=count,
        )

    async def view_url(self, user_id: str, document_id: str) -> SignedUrlResult:
        """Signed URL for inline viewing."""
        return await self._signed_url(user_id, document_id, download=False)

    async def download_url(self, user_id: str, document_id: str) -> SignedUrlResult:
        """Signed URL that asks the browser to save the file."""
        return await self._signed_url(user_id, document_id, download=True)

    async def download(self, user_id: str, document_id: str) -> DocumentContent:
        """Return the document bytes for a proxied download."""
        doc = await self._get_document(document_id)
        await self.access_gate.authorize(user_id, doc.offering_id, Permission.READ)
        result = await self.locator.download(doc.storage_key)
        count = await self.document_repo.increment_download_count(document_id)
        if count is None:
            raise ResourceNotFoundException("document", document_id)
        await self.audit.record(
            DocumentAuditAction.DOWNLOAD,
            user_id,
            document_id=document_id,
            offering_id=doc.offering_id,
            metadata={"path": result.actual_path, "legacy": result.is_legacy, "proxied": True},
        )
        return DocumentContent(
            data=result.value,
            filename=InputSanitizer.header_filename(doc.filename),
            mime_type=doc.mime_type,
            download_count=count,
        )
