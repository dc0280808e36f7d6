"""Domain exceptions for the offering documents service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class OfferingDocsException(Exception):
    """Base exception for all offering documents errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(OfferingDocsException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        """Initialize with message, optional field name and error code.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            error_code: Machine-readable code (e.g. INVALID_CATEGORY).
        """
        details = {"field": field} if field else {}
        super().__init__(message, error_code, details)


class FileTooLargeException(OfferingDocsException):
    """Raised when a declared or actual file size exceeds the configured ceiling (413)."""

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            f"PDF exceeds {max_size // (1024 * 1024)} MB limit.",
            "FILE_TOO_LARGE",
            {"size": size, "max_size": max_size},
        )


class UnsupportedFileTypeException(OfferingDocsException):
    """Raised when MIME type, extension or content signature is not PDF (415)."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Only PDF files are allowed.",
            "ONLY_PDF_ALLOWED",
            {"reason": reason},
        )


class AuthenticationException(OfferingDocsException):
    """Raised when authentication fails (e.g. missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(OfferingDocsException):
    """Raised when the caller lacks the role required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Access denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'offering', 'document').
            action: Optional permission that was required (e.g. 'write').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Access denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "ACCESS_DENIED", details)


class ResourceNotFoundException(OfferingDocsException):
    """Raised when a requested offering or document is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'offering', 'document').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateDocumentException(OfferingDocsException):
    """Raised when the same content already exists in the offering (409)."""

    def __init__(
        self,
        offering_id: str,
        checksum: str,
        existing_document_id: str | None = None,
        existing_title: str | None = None,
    ) -> None:
        message = (
            f"Duplicate of: {existing_title}" if existing_title else "Duplicate file detected"
        )
        super().__init__(
            message,
            "DUPLICATE_FILE",
            {
                "offering_id": offering_id,
                "checksum_sha256": checksum,
                "existing_document_id": existing_document_id,
            },
        )


class DocumentStoreException(OfferingDocsException):
    """Raised when the relational store fails unexpectedly (500)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Document store failure during {operation}",
            "DATABASE_ERROR",
            {"operation": operation, "reason": reason},
        )


class SqlNotConfiguredException(OfferingDocsException):
    """Raised when an operation requires Postgres but the database is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
