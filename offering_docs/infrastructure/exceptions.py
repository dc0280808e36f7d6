"""Infrastructure exceptions for blob storage operations.

Storage errors extend OfferingDocsException so presentation can map them
to HTTP responses consistently.
"""

from offering_docs.domain.exceptions import OfferingDocsException


class StorageException(OfferingDocsException):
    """Base exception for storage operations."""


class StorageNotFoundError(StorageException):
    """Object not found in storage (after every candidate path was tried)."""

    def __init__(self, file_path: str, tried: list[str] | None = None) -> None:
        details: dict = {"file_path": file_path}
        if tried:
            details["tried"] = tried
        super().__init__(
            f"File not found: {file_path}",
            "STORAGE_NOT_FOUND",
            details,
        )


class StorageUploadError(StorageException):
    """File upload failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDownloadError(StorageException):
    """File download failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to download file: {file_path}",
            "STORAGE_DOWNLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """File deletion failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageSignedUrlError(StorageException):
    """Presigned/signed URL could not be created."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to create signed URL for: {file_path}",
            "STORAGE_SIGNED_URL_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageTokenError(StorageException):
    """Local transfer token is unknown, expired, already used or misapplied."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Invalid or expired storage token",
            "STORAGE_TOKEN_INVALID",
            {"reason": reason},
        )


class StoragePermissionError(StorageException):
    """Insufficient permissions for storage operation."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
