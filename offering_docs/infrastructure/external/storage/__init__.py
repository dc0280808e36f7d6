"""Storage: local filesystem and S3-compatible backends.

Factory creates backend from offering_docs.core.config. Implementations are
loaded lazily inside StorageFactory.create_storage_service() so the local
backend does not import boto3.

Implementations satisfy IStorageService (upload, download, delete, exists,
generate_download_url, generate_upload_url).
"""

from offering_docs.infrastructure.external.storage.factory import StorageFactory

__all__ = [
    "StorageFactory",
]
