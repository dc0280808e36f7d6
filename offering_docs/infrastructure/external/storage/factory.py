"""Storage service factory: creates local or S3 backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from offering_docs.application.interfaces.storage import IStorageService

if TYPE_CHECKING:
    from offering_docs.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(settings: "Settings | None" = None) -> IStorageService:
        """Create storage service from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            LocalStorageService or S3StorageService.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from offering_docs.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from offering_docs.infrastructure.external.storage.local_storage import (
                LocalStorageService,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            # Local keys live under a directory named after the bucket.
            return LocalStorageService(
                storage_root=f"{s.storage_root.rstrip('/')}/{s.storage_bucket}",
                base_url=s.storage_base_url,
            )
        if backend == "s3":
            from offering_docs.infrastructure.external.storage.s3_storage import (
                S3StorageService,
            )

            return S3StorageService(
                bucket=s.storage_bucket,
                region=s.s3_region,
                endpoint_url=s.s3_endpoint_url,
                access_key=s.s3_access_key,
                secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
            )
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: 'local', 's3'"
        )
