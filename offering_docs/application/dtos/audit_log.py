"""DTOs for the document audit log."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit log record. Append-only; no update."""

    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    offering_id: str | None
    details: dict[str, Any] | None
    request_id: str | None


@dataclass(frozen=True)
class AuditLogResult:
    """Single audit log entry (read-model)."""

    id: str
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    offering_id: str | None
    details: dict[str, Any] | None
    request_id: str | None
    timestamp: datetime
