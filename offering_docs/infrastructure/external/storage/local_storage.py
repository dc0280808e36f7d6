"""Local filesystem storage with path validation, atomic writes and transfer tokens."""

from __future__ import annotations

import json
import os
import secrets
import tempfile
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, cast
from urllib.parse import quote

import aiofiles
import aiofiles.os

from offering_docs.application.interfaces.storage import PresignedUpload
from offering_docs.infrastructure.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageTokenError,
    StorageUploadError,
)
from offering_docs.shared.utils.datetime import utc_now

UPLOAD_ROUTE = "/api/v1/storage/upload"
DOWNLOAD_ROUTE = "/api/v1/storage/download"


@dataclass(frozen=True)
class UploadGrant:
    storage_ref: str
    content_type: str
    expires_at: datetime


@dataclass(frozen=True)
class DownloadGrant:
    storage_ref: str
    expires_at: datetime
    download: bool = False
    filename: str | None = None


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    Metadata stored in .meta.json sidecar. Presigned transfers are in-memory
    tokens served by the /storage routes; upload tokens are single-use.
    """

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            base_url: Base URL for transfer endpoints (e.g. https://api.example.com).
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)
        self._upload_tokens: dict[str, UploadGrant] = {}
        self._download_tokens: dict[str, DownloadGrant] = {}

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(storage_ref, "path_validation")
        return full_path

    @staticmethod
    def _meta_path(file_path: Path) -> Path:
        return file_path.with_suffix(file_path.suffix + ".meta.json")

    async def _write_metadata(self, file_path: Path, metadata: dict[str, Any]) -> None:
        """Write JSON sidecar."""
        meta_path = self._meta_path(file_path)
        async with aiofiles.open(meta_path, "w") as f:
            await f.write(json.dumps(metadata, indent=2))
        os.chmod(meta_path, 0o640)

    async def _read_metadata(self, file_path: Path) -> dict[str, Any]:
        """Read JSON sidecar or empty dict."""
        meta_path = self._meta_path(file_path)
        if not meta_path.exists():
            return {}
        async with aiofiles.open(meta_path, "r") as f:
            content = await f.read()
            result = json.loads(content)
            return cast(dict[str, Any], result) if isinstance(result, dict) else {}

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}" if self.base_url else path

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Write bytes atomically (temp file + rename); overwrites an existing object."""
        target_path = self._get_full_path(storage_ref)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(file_data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
            upload_meta: dict[str, Any] = {
                "storage_ref": storage_ref,
                "size": len(file_data),
                "content_type": content_type,
                "uploaded_at": utc_now().isoformat(),
                "custom": metadata or {},
            }
            await self._write_metadata(target_path, upload_meta)
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return {
            "storage_ref": storage_ref,
            "size": len(file_data),
            "uploaded_at": upload_meta["uploaded_at"],
        }

    async def download(self, storage_ref: str) -> bytes:
        """Return file content."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.is_file():
            raise StorageNotFoundError(storage_ref)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise StorageDownloadError(storage_ref, str(e)) from e

    async def delete(self, storage_ref: str) -> bool:
        """Delete file and metadata, pruning empty parents. Returns True if deleted."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.is_file():
            return False
        try:
            await aiofiles.os.remove(file_path)
            meta_path = self._meta_path(file_path)
            if meta_path.exists():
                await aiofiles.os.remove(meta_path)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root:
            try:
                if any(parent.iterdir()):
                    break
                parent.rmdir()
                parent = parent.parent
            except OSError:
                break
        return True

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        try:
            return self._get_full_path(storage_ref).is_file()
        except StoragePermissionError:
            return False

    async def generate_download_url(
        self,
        storage_ref: str,
        expiration: timedelta = timedelta(hours=1),
        download: bool = False,
        filename: str | None = None,
    ) -> str:
        """Return temporary download URL (token-based for local)."""
        if not await self.exists(storage_ref):
            raise StorageNotFoundError(storage_ref)
        self._cleanup_expired_tokens()
        token = secrets.token_urlsafe(32)
        self._download_tokens[token] = DownloadGrant(
            storage_ref=storage_ref,
            expires_at=utc_now() + expiration,
            download=download,
            filename=filename,
        )
        return self._url(f"{DOWNLOAD_ROUTE}/{quote(token)}")

    async def generate_upload_url(
        self,
        storage_ref: str,
        content_type: str,
        expiration: timedelta = timedelta(minutes=10),
    ) -> PresignedUpload:
        """Return a single-use PUT URL bound to storage_ref and content_type."""
        self._get_full_path(storage_ref)
        self._cleanup_expired_tokens()
        token = secrets.token_urlsafe(32)
        self._upload_tokens[token] = UploadGrant(
            storage_ref=storage_ref,
            content_type=content_type.strip().lower(),
            expires_at=utc_now() + expiration,
        )
        return PresignedUpload(
            url=self._url(f"{UPLOAD_ROUTE}/{quote(token)}"),
            token=token,
            path=storage_ref,
        )

    def _cleanup_expired_tokens(self) -> None:
        """Remove expired transfer tokens."""
        now = utc_now()
        for token in [t for t, g in self._download_tokens.items() if g.expires_at <= now]:
            del self._download_tokens[token]
        for token in [t for t, g in self._upload_tokens.items() if g.expires_at <= now]:
            del self._upload_tokens[token]

    def consume_upload_token(self, token: str, content_type: str | None) -> UploadGrant:
        """Validate and invalidate an upload token.

        Raises:
            StorageTokenError: Unknown, expired, or content type differs from the grant.
        """
        grant = self._upload_tokens.pop(token, None)
        if grant is None:
            raise StorageTokenError("unknown or already used upload token")
        if utc_now() > grant.expires_at:
            raise StorageTokenError("upload token expired")
        sent = (content_type or "").split(";")[0].strip().lower()
        if sent != grant.content_type:
            raise StorageTokenError(
                f"content type {sent!r} does not match granted {grant.content_type!r}"
            )
        return grant

    def validate_download_token(self, token: str) -> DownloadGrant | None:
        """Return the grant if token valid and not expired."""
        grant = self._download_tokens.get(token)
        if grant is None:
            return None
        if utc_now() > grant.expires_at:
            del self._download_tokens[token]
            return None
        return grant
