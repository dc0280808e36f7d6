"""Move blobs stored under legacy keys to the current key layout."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from offering_docs.application.dtos.document import LegacyMigrationReport
from offering_docs.application.services.storage_paths import StoragePathResolver
from offering_docs.infrastructure.exceptions import StorageException, StorageNotFoundError

if TYPE_CHECKING:
    from offering_docs.application.interfaces.repositories import IDocumentRepository
    from offering_docs.application.interfaces.storage import IStorageService

logger = logging.getLogger(__name__)


class MigrateLegacyDocumentPathsUseCase:
    """Rewrites storage_key of documents that still point at a legacy key.

    For each such document the blob is copied to the canonical key, the row
    is updated, then the legacy blob is removed. A blob that was already
    moved (present only at the canonical key) just gets its row updated.
    """

    def __init__(
        self,
        document_repo: "IDocumentRepository",
        storage_service: "IStorageService",
        paths: StoragePathResolver,
    ) -> None:
        self._document_repo = document_repo
        self._storage = storage_service
        self._paths = paths

    async def run(
        self, offering_id: str | None = None, dry_run: bool = False
    ) -> LegacyMigrationReport:
        """Migrate every legacy document (optionally of one offering).

        Returns:
            Per-document outcome lists; per-document failures do not stop the run.
        """
        documents = await self._document_repo.list_all(offering_id)
        report = LegacyMigrationReport(scanned=len(documents))
        for doc in documents:
            if not self._paths.is_legacy_format(doc.storage_key):
                report.already_canonical.append(doc.id)
                continue
            target = self._paths.migrated_path(doc.storage_key)
            if dry_run:
                report.migrated.append(doc.id)
                continue
            try:
                moved = await self._move(doc.storage_key, target, doc.mime_type)
            except StorageException as exc:
                logger.warning("Legacy migration failed for %s: %s", doc.id, exc)
                report.failed[doc.id] = exc.error_code
                continue
            if not moved:
                report.missing.append(doc.id)
                continue
            await self._document_repo.update_storage_key(doc.id, target)
            await self._remove_legacy(doc.storage_key)
            logger.info("Migrated document %s: %s -> %s", doc.id, doc.storage_key, target)
            report.migrated.append(doc.id)
        return report

    async def _move(self, source: str, target: str, content_type: str) -> bool:
        """Copy source to target. Returns False when neither key holds the blob."""
        try:
            data = await self._storage.download(source)
        except StorageNotFoundError:
            return await self._storage.exists(target)
        await self._storage.upload(data, target, content_type)
        return True

    async def _remove_legacy(self, source: str) -> None:
        try:
            await self._storage.delete(source)
        except StorageException as exc:
            logger.warning("Could not remove legacy blob %s: %s", source, exc)
