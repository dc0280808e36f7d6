"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from offering_docs.application.dtos.audit_log import (
        AuditLogEntryCreate,
        AuditLogResult,
    )
    from offering_docs.application.dtos.document import (
        DocumentCreate,
        DocumentFilter,
        DocumentResult,
        DocumentUpdate,
    )
    from offering_docs.application.dtos.offering import (
        MembershipResult,
        OfferingResult,
    )


class IDocumentRepository(Protocol):
    """Protocol for document repository (DIP)."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID."""

    async def get_by_checksum(
        self, offering_id: str, checksum_sha256: str
    ) -> DocumentResult | None:
        """Return the document with this content hash in the offering, if any."""

    async def get_by_storage_key(
        self, offering_id: str, storage_key: str
    ) -> DocumentResult | None:
        """Return the document whose blob lives at storage_key, if any."""

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        """Insert a document. Raises DuplicateDocumentException on a checksum collision."""

    async def list_for_offering(
        self, offering_id: str, filters: DocumentFilter
    ) -> list[DocumentResult]:
        """Return documents of an offering, newest first."""

    async def update_document(
        self, document_id: str, values: dict[str, object]
    ) -> DocumentResult | None:
        """Apply column values; return updated document or None if absent."""

    async def delete_document(self, document_id: str) -> bool:
        """Hard delete. Returns False when no row existed."""

    async def increment_download_count(self, document_id: str) -> int | None:
        """Atomically add one to download_count; return new value or None if absent."""

    async def update_storage_key(self, document_id: str, storage_key: str) -> None:
        """Rewrite the blob key of a document (legacy path migration only)."""

    async def list_all(self, offering_id: str | None = None) -> list[DocumentResult]:
        """Return every document (optionally of one offering), oldest first."""


class IOfferingRepository(Protocol):
    """Protocol for offering and organization membership lookup (read-only)."""

    async def get_offering(self, offering_id: str) -> OfferingResult | None:
        """Return offering by ID."""

    async def get_membership(
        self, organization_id: str, user_id: str
    ) -> MembershipResult | None:
        """Return the user's membership in the organization, if any."""


class IAuditLogRepository(Protocol):
    """Protocol for the append-only audit log."""

    async def create(self, data: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit entry."""
