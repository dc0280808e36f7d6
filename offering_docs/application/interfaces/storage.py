"""Storage service interface (DIP). Implementations: LocalStorageService, S3StorageService."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Protocol


@dataclass(frozen=True)
class PresignedUpload:
    """Write URL issued by a storage backend for one object key."""

    url: str
    token: str
    path: str


class IStorageService(Protocol):
    """Protocol for object storage backends (local, S3-compatible).

    Missing objects raise StorageNotFoundError from download; delete reports
    them by returning False.
    """

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Store bytes under storage_ref (overwrites)."""
        ...

    async def download(self, storage_ref: str) -> bytes:
        """Return the full object content."""
        ...

    async def delete(self, storage_ref: str) -> bool:
        """Delete object. Returns True if deleted, False if not found."""
        ...

    async def exists(self, storage_ref: str) -> bool:
        """Return True if object exists."""
        ...

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
        download: bool = False,
        filename: str | None = None,
    ) -> str:
        """Return a temporary read URL. download=True asks for attachment disposition."""
        ...

    async def generate_upload_url(
        self,
        storage_ref: str,
        content_type: str,
        expiration: timedelta = timedelta(minutes=10),
    ) -> PresignedUpload:
        """Return a temporary write URL bound to storage_ref and content_type."""
        ...
