"""Legacy-aware blob access: try each candidate key in order.

Reads, deletes and signed-URL creation all go through try_in_order so a
document whose blob still lives under a legacy key keeps working without
touching its stored metadata.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Generic, TypeVar

from offering_docs.application.interfaces.storage import IStorageService
from offering_docs.application.services.storage_paths import StoragePathResolver
from offering_docs.infrastructure.exceptions import StorageException, StorageNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FallbackResult(Generic[T]):
    """Value produced by the first candidate that worked and where it was found."""

    value: T
    actual_path: str
    is_legacy: bool


async def try_in_order(
    candidates: list[str],
    attempt: Callable[[str], Awaitable[T]],
) -> FallbackResult[T]:
    """Run attempt on each candidate until one succeeds.

    A candidate fails when attempt raises a StorageException. Anything else
    propagates immediately.

    Raises:
        StorageNotFoundError: Every candidate failed (lists the tried keys).
    """
    if not candidates:
        raise ValueError("try_in_order needs at least one candidate path")
    errors: dict[str, str] = {}
    for path in candidates:
        try:
            value = await attempt(path)
        except StorageException as exc:
            errors[path] = exc.error_code
            continue
        return FallbackResult(
            value=value,
            actual_path=path,
            is_legacy=StoragePathResolver.is_legacy_format(path),
        )
    logger.debug("No candidate succeeded: %s", errors)
    raise StorageNotFoundError(candidates[0], tried=list(candidates))


class StorageBlobLocator:
    """Download, delete and sign blobs of stored documents with legacy fallback."""

    def __init__(self, storage: IStorageService, paths: StoragePathResolver) -> None:
        self.storage = storage
        self.paths = paths

    async def _run(
        self,
        storage_key: str,
        attempt: Callable[[str], Awaitable[T]],
        operation: str,
    ) -> FallbackResult[T]:
        result = await try_in_order(self.paths.candidates_for_key(storage_key), attempt)
        if result.actual_path != storage_key:
            logger.warning(
                "Fallback %s hit: stored key %s resolved at %s (legacy=%s)",
                operation,
                storage_key,
                result.actual_path,
                result.is_legacy,
            )
        return result

    async def download(self, storage_key: str) -> FallbackResult[bytes]:
        return await self._run(storage_key, self.storage.download, "download")

    async def delete(self, storage_key: str) -> FallbackResult[bool]:
        """Delete the blob wherever it is; a False return from storage counts as a miss."""

        async def _delete(path: str) -> bool:
            if not await self.storage.delete(path):
                raise StorageNotFoundError(path)
            return True

        return await self._run(storage_key, _delete, "delete")

    async def create_signed_url(
        self,
        storage_key: str,
        expiration: timedelta,
        download: bool = False,
        filename: str | None = None,
    ) -> FallbackResult[str]:
        """Sign a read URL for the first candidate that exists."""

        async def _sign(path: str) -> str:
            if not await self.storage.exists(path):
                raise StorageNotFoundError(path)
            return await self.storage.generate_download_url(
                path, expiration=expiration, download=download, filename=filename
            )

        return await self._run(storage_key, _sign, "signed_url")
