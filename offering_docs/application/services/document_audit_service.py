"""Best-effort audit trail of document actions."""

from __future__ import annotations

import logging
from typing import Any

from offering_docs.application.dtos.audit_log import AuditLogEntryCreate
from offering_docs.application.interfaces.repositories import IAuditLogRepository
from offering_docs.domain.enums import DocumentAuditAction

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "document"


class DocumentAuditService:
    """Writes DOCUMENT_<ACTION> rows to the audit log.

    A failed write is logged at WARNING and never reaches the caller.
    """

    def __init__(
        self,
        audit_repo: IAuditLogRepository,
        request_id: str | None = None,
    ) -> None:
        self.audit_repo = audit_repo
        self.request_id = request_id

    async def record(
        self,
        action: DocumentAuditAction,
        actor_id: str | None,
        document_id: str | None = None,
        offering_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        entry = AuditLogEntryCreate(
            user_id=actor_id,
            action=f"DOCUMENT_{action.value}",
            resource_type=RESOURCE_TYPE,
            resource_id=document_id,
            offering_id=offering_id,
            details=metadata or {},
            request_id=self.request_id,
        )
        try:
            await self.audit_repo.create(entry)
        except Exception as exc:
            logger.warning(
                "Audit write failed for %s (document=%s, offering=%s): %s",
                entry.action,
                document_id,
                offering_id,
                exc,
            )
