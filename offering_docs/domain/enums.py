"""Domain enumerations for offering documents.

Enums represent fixed sets of domain values (category, visibility, roles,
permissions, upload lifecycle, audit actions).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]

    @classmethod
    def normalize(cls, raw: str | None):
        """Return the member matching raw case-insensitively, or None.

        Used for query filters where unknown values are ignored rather than rejected.
        """
        if not raw:
            return None
        wanted = raw.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class DocumentCategory(_ValuesMixin, str, Enum):
    """Document category shown to investors."""

    FINANCIAL = "Financial"
    APPRAISAL = "Appraisal"
    LEGAL = "Legal"
    TECHNICAL = "Technical"
    OTHER = "Other"


class DocumentVisibility(_ValuesMixin, str, Enum):
    """Document visibility."""

    PUBLIC = "Public"
    PRIVATE = "Private"


class Permission(_ValuesMixin, str, Enum):
    """Permission required by a document operation."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"


class OfferingRole(_ValuesMixin, str, Enum):
    """Role of a user within the organization that owns an offering.

    Ordered for permission purposes: viewer < editor < manager < owner.
    """

    VIEWER = "viewer"
    EDITOR = "editor"
    MANAGER = "manager"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def allows(self, permission: Permission) -> bool:
        """Return True if this role satisfies the given permission."""
        return self.rank >= _ROLE_RANK[MINIMUM_ROLE[permission]]


_ROLE_RANK: dict[OfferingRole, int] = {
    OfferingRole.VIEWER: 0,
    OfferingRole.EDITOR: 1,
    OfferingRole.MANAGER: 2,
    OfferingRole.OWNER: 3,
}

# Lowest role that grants each permission.
MINIMUM_ROLE: dict[Permission, OfferingRole] = {
    Permission.READ: OfferingRole.VIEWER,
    Permission.WRITE: OfferingRole.EDITOR,
    Permission.DELETE: OfferingRole.MANAGER,
}


class UploadState(_ValuesMixin, str, Enum):
    """Two-phase upload lifecycle: REQUESTED -> PRESIGNED -> terminal state."""

    REQUESTED = "requested"
    PRESIGNED = "presigned"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    DUPLICATE = "duplicate"


class DocumentAuditAction(_ValuesMixin, str, Enum):
    """Actions recorded in the document audit log."""

    LIST = "LIST"
    UPLOAD = "UPLOAD"
    EDIT = "EDIT"
    DELETE = "DELETE"
    VIEW = "VIEW"
    DOWNLOAD = "DOWNLOAD"
