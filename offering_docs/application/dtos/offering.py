"""DTOs for offerings and organization membership (read-only to this service)."""

from dataclasses import dataclass

from offering_docs.domain.enums import OfferingRole


@dataclass(frozen=True)
class OfferingResult:
    id: str
    organization_id: str
    name: str


@dataclass(frozen=True)
class MembershipResult:
    organization_id: str
    user_id: str
    role: OfferingRole
