"""Audit log repository. Append-only; implements IAuditLogRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from offering_docs.application.dtos.audit_log import AuditLogEntryCreate, AuditLogResult
from offering_docs.infrastructure.persistence.models.audit_log import AuditLog
from offering_docs.shared.utils.datetime import ensure_utc
from offering_docs.shared.utils.generators import generate_cuid


def _orm_to_result(row: AuditLog) -> AuditLogResult:
    """Map ORM to application DTO."""
    return AuditLogResult(
        id=row.id,
        user_id=row.user_id,
        action=row.action,
        resource_type=row.resource_type,
        resource_id=row.resource_id,
        offering_id=row.offering_id,
        details=row.details,
        request_id=row.request_id,
        timestamp=ensure_utc(row.timestamp),
    )


class AuditLogRepository:
    """Append-only audit log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit log entry in a savepoint; return created record."""
        row = AuditLog(
            id=generate_cuid(),
            user_id=entry.user_id,
            action=entry.action,
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            offering_id=entry.offering_id,
            details=entry.details,
            request_id=entry.request_id,
        )
        async with self.db.begin_nested():
            self.db.add(row)
            await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def list_for_resource(
        self, resource_type: str, resource_id: str, limit: int = 100
    ) -> list[AuditLogResult]:
        """Entries for one resource, newest first."""
        result = await self.db.execute(
            select(AuditLog)
            .where(
                AuditLog.resource_type == resource_type,
                AuditLog.resource_id == resource_id,
            )
            .order_by(AuditLog.timestamp.desc())
            .limit(limit)
        )
        return [_orm_to_result(r) for r in result.scalars().all()]
