"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from offering_docs.domain.enums import DocumentAuditAction, OfferingRole, Permission


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity resolved from request credentials."""

    user_id: str
    claims: dict[str, Any] | None = None


class IAuthenticator(Protocol):
    """Resolves bearer credentials to a user. Chosen once when the app is built."""

    def authenticate(self, token: str | None) -> AuthenticatedUser:
        """Return the authenticated user or raise AuthenticationException."""
        ...


class IAccessGate(Protocol):
    """Per-offering role check."""

    async def authorize(
        self, user_id: str, offering_id: str, permission: Permission
    ) -> OfferingRole:
        """Return the caller's role or raise (404 offering, 403 role)."""
        ...


class IDocumentAuditService(Protocol):
    """Best-effort document audit trail; never raises."""

    async def record(
        self,
        action: DocumentAuditAction,
        actor_id: str | None,
        document_id: str | None = None,
        offering_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Append one audit entry, logging and swallowing any failure."""
        ...
