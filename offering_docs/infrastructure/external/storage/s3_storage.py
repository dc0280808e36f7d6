"""S3-compatible object storage (AWS S3, MinIO, etc.) with presigned URLs."""

from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import Any

import boto3
from botocore.exceptions import ClientError

from offering_docs.application.interfaces.storage import PresignedUpload
from offering_docs.infrastructure.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StorageSignedUrlError,
    StorageUploadError,
)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class S3StorageService:
    """S3-compatible storage with server-side encryption and presigned URLs.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        client: Any = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            client: Pre-built boto3 client (tests).
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        if client is not None:
            self._client = client
            return
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Put object (overwrites)."""
        def _upload() -> dict[str, Any]:
            meta = {"original-size": str(len(file_data))}
            if metadata:
                for k, v in metadata.items():
                    meta[k.lower().replace("_", "-")] = v
            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_ref,
                Body=file_data,
                ContentType=content_type,
                ServerSideEncryption="AES256",
                Metadata=meta,
            )
            head = self._client.head_object(Bucket=self.bucket, Key=storage_ref)
            return {
                "storage_ref": storage_ref,
                "size": len(file_data),
                "uploaded_at": head["LastModified"].isoformat(),
            }

        try:
            return await asyncio.to_thread(_upload)
        except ClientError as e:
            raise StorageUploadError(storage_ref, str(e)) from e

    async def download(self, storage_ref: str) -> bytes:
        """Return object content."""
        def _get() -> bytes:
            resp = self._client.get_object(Bucket=self.bucket, Key=storage_ref)
            return resp["Body"].read()

        try:
            return await asyncio.to_thread(_get)
        except ClientError as e:
            if _is_not_found(e):
                raise StorageNotFoundError(storage_ref) from e
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def delete(self, storage_ref: str) -> bool:
        """Delete object. Returns True if deleted, False if it did not exist."""
        def _delete() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=storage_ref)
            except ClientError as e:
                if _is_not_found(e):
                    return False
                raise
            self._client.delete_object(Bucket=self.bucket, Key=storage_ref)
            return True

        try:
            return await asyncio.to_thread(_delete)
        except ClientError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e

    async def exists(self, storage_ref: str) -> bool:
        """Return True if object exists."""
        def _exists() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=storage_ref)
                return True
            except ClientError as e:
                if _is_not_found(e):
                    return False
                raise

        try:
            return await asyncio.to_thread(_exists)
        except ClientError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
        download: bool = False,
        filename: str | None = None,
    ) -> str:
        """Return presigned GET URL; download=True adds an attachment disposition."""
        params: dict[str, Any] = {"Bucket": self.bucket, "Key": storage_ref}
        if download:
            disposition = "attachment"
            if filename:
                disposition = f'attachment; filename="{filename}"'
            params["ResponseContentDisposition"] = disposition

        def _presign() -> str:
            return self._client.generate_presigned_url(
                "get_object",
                Params=params,
                ExpiresIn=int(expiration.total_seconds()),
            )

        try:
            return await asyncio.to_thread(_presign)
        except ClientError as e:
            raise StorageSignedUrlError(storage_ref, str(e)) from e

    async def generate_upload_url(
        self,
        storage_ref: str,
        content_type: str,
        expiration: timedelta = timedelta(minutes=10),
    ) -> PresignedUpload:
        """Return presigned PUT URL; the client must send the same Content-Type."""
        def _presign() -> str:
            return self._client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": storage_ref,
                    "ContentType": content_type,
                },
                ExpiresIn=int(expiration.total_seconds()),
            )

        try:
            url = await asyncio.to_thread(_presign)
        except ClientError as e:
            raise StorageSignedUrlError(storage_ref, str(e)) from e
        # S3 has no separate upload token; the signature is part of the URL.
        return PresignedUpload(url=url, token="", path=storage_ref)
