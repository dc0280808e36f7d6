"""DocumentAuditService: DOCUMENT_<ACTION> entries, never raising."""

import logging
from unittest.mock import AsyncMock

from offering_docs.application.services.document_audit_service import DocumentAuditService
from offering_docs.domain.enums import DocumentAuditAction
from tests.fakes import InMemoryAuditLogRepository


async def test_records_entry() -> None:
    repo = InMemoryAuditLogRepository()
    audit = DocumentAuditService(repo, request_id="req-1")
    await audit.record(
        DocumentAuditAction.VIEW,
        "viewer-1",
        document_id="doc-1",
        offering_id="off_1",
        metadata={"legacy": False},
    )
    entry = repo.entries[0]
    assert entry.action == "DOCUMENT_VIEW"
    assert entry.resource_type == "document"
    assert (entry.user_id, entry.resource_id, entry.offering_id) == ("viewer-1", "doc-1", "off_1")
    assert entry.details == {"legacy": False}
    assert entry.request_id == "req-1"


async def test_failure_is_logged_and_swallowed(caplog) -> None:
    repo = AsyncMock()
    repo.create.side_effect = RuntimeError("db down")
    audit = DocumentAuditService(repo)
    with caplog.at_level(logging.WARNING):
        await audit.record(DocumentAuditAction.DELETE, "manager-1", document_id="doc-1")
    assert "Audit write failed for DOCUMENT_DELETE" in caplog.text
