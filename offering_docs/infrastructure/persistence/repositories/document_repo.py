"""Document repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from offering_docs.application.dtos.document import (
    DocumentCreate,
    DocumentFilter,
    DocumentResult,
)
from offering_docs.domain.enums import DocumentCategory, DocumentVisibility
from offering_docs.domain.exceptions import (
    DocumentStoreException,
    DuplicateDocumentException,
)
from offering_docs.infrastructure.persistence.models.document import (
    UQ_OFFERING_CHECKSUM,
    Document,
)
from offering_docs.infrastructure.persistence.repositories.base import BaseRepository
from offering_docs.shared.utils.datetime import ensure_utc


def _create_to_document(d: DocumentCreate) -> Document:
    """Map DocumentCreate (write-model) to ORM Document for persistence."""
    return Document(
        id=d.id,
        offering_id=d.offering_id,
        title=d.title,
        filename=d.filename,
        mime_type=d.mime_type,
        size_bytes=d.size_bytes,
        category=d.category.value,
        visibility=d.visibility.value,
        storage_key=d.storage_key,
        checksum_sha256=d.checksum_sha256,
        download_count=0,
        uploaded_by=d.uploaded_by,
    )


def _document_to_result(d: Document) -> DocumentResult:
    """Map ORM Document to application DocumentResult."""
    return DocumentResult(
        id=d.id,
        offering_id=d.offering_id,
        title=d.title,
        filename=d.filename,
        mime_type=d.mime_type,
        size_bytes=d.size_bytes,
        category=DocumentCategory(d.category),
        visibility=DocumentVisibility(d.visibility),
        storage_key=d.storage_key,
        checksum_sha256=d.checksum_sha256,
        download_count=d.download_count,
        uploaded_by=d.uploaded_by,
        uploaded_at=ensure_utc(d.uploaded_at),
        updated_at=ensure_utc(d.updated_at),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _violates(error: IntegrityError, constraint: str) -> bool:
    """True if the integrity error names the given constraint (asyncpg or message text)."""
    orig = getattr(error, "orig", None)
    name = getattr(orig, "constraint_name", None) or getattr(
        getattr(orig, "__cause__", None), "constraint_name", None
    )
    return name == constraint or constraint in str(orig)


class DocumentRepository(BaseRepository[Document]):
    """Document repository. create_document() accepts DocumentCreate; reads return DocumentResult."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        row = await self._get_orm(document_id)
        return _document_to_result(row) if row else None

    async def get_by_checksum(
        self, offering_id: str, checksum_sha256: str
    ) -> DocumentResult | None:
        result = await self.db.execute(
            select(Document).where(
                Document.offering_id == offering_id,
                Document.checksum_sha256 == checksum_sha256,
            )
        )
        row = result.scalar_one_or_none()
        return _document_to_result(row) if row else None

    async def get_by_storage_key(
        self, offering_id: str, storage_key: str
    ) -> DocumentResult | None:
        result = await self.db.execute(
            select(Document).where(
                Document.offering_id == offering_id,
                Document.storage_key == storage_key,
            )
        )
        row = result.scalars().first()
        return _document_to_result(row) if row else None

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        """Insert a document row.

        Raises:
            DuplicateDocumentException: (offering_id, checksum_sha256) already present.
            DocumentStoreException: Any other database failure.
        """
        try:
            created = await self._create_orm(_create_to_document(data))
        except IntegrityError as e:
            if _violates(e, UQ_OFFERING_CHECKSUM):
                existing = await self.get_by_checksum(data.offering_id, data.checksum_sha256)
                raise DuplicateDocumentException(
                    data.offering_id,
                    data.checksum_sha256,
                    existing.id if existing else None,
                    existing.title if existing else None,
                ) from e
            raise DocumentStoreException("create_document", str(e.orig)) from e
        except SQLAlchemyError as e:
            raise DocumentStoreException("create_document", str(e)) from e
        return _document_to_result(created)

    async def list_for_offering(
        self, offering_id: str, filters: DocumentFilter
    ) -> list[DocumentResult]:
        """Return documents of an offering, newest first."""
        q = select(Document).where(Document.offering_id == offering_id)
        if filters.category is not None:
            q = q.where(Document.category == filters.category.value)
        if filters.visibility is not None:
            q = q.where(Document.visibility == filters.visibility.value)
        if filters.query:
            pattern = f"%{_escape_like(filters.query)}%"
            q = q.where(
                or_(
                    Document.title.ilike(pattern, escape="\\"),
                    Document.filename.ilike(pattern, escape="\\"),
                )
            )
        q = q.order_by(Document.uploaded_at.desc(), Document.id.desc())
        result = await self.db.execute(q)
        return [_document_to_result(d) for d in result.scalars().all()]

    async def update_document(
        self, document_id: str, values: dict[str, object]
    ) -> DocumentResult | None:
        """Apply column values to the row; None when it does not exist."""
        orm = await self._get_orm(document_id)
        if orm is None:
            return None
        for column, value in values.items():
            setattr(orm, column, value)
        try:
            updated = await self._save_orm(orm)
        except SQLAlchemyError as e:
            raise DocumentStoreException("update_document", str(e)) from e
        return _document_to_result(updated)

    async def delete_document(self, document_id: str) -> bool:
        """Hard delete by id. Returns False when no row matched."""
        result = await self.db.execute(
            delete(Document)
            .where(Document.id == document_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount > 0

    async def increment_download_count(self, document_id: str) -> int | None:
        """Add one to download_count in a single statement; return the new value."""
        result = await self.db.execute(
            update(Document)
            .where(Document.id == document_id)
            .values(download_count=Document.download_count + 1)
            .returning(Document.download_count)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

    async def update_storage_key(self, document_id: str, storage_key: str) -> None:
        await self.db.execute(
            update(Document)
            .where(Document.id == document_id)
            .values(storage_key=storage_key)
            .execution_options(synchronize_session=False)
        )

    async def list_all(self, offering_id: str | None = None) -> list[DocumentResult]:
        """Return every document (optionally of one offering), oldest first."""
        q = select(Document)
        if offering_id is not None:
            q = q.where(Document.offering_id == offering_id)
        q = q.order_by(Document.uploaded_at.asc(), Document.id.asc())
        result = await self.db.execute(q)
        return [_document_to_result(d) for d in result.scalars().all()]
