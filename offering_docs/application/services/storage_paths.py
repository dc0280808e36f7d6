"""Blob key layout for offering documents.

Current keys are ``{offering_id}/{prefix}/{filename}``; keys written before the
prefix existed are ``{offering_id}/{filename}``. Both layouts stay readable.
"""

from dataclasses import dataclass

from offering_docs.core.config import Settings


@dataclass(frozen=True)
class DocumentStorageConfig:
    """Storage layout and limits, built once from Settings at app creation."""

    bucket: str = "offering-media"
    prefix: str = "Documents"
    max_file_size: int = 25 * 1024 * 1024
    upload_url_ttl_seconds: int = 600
    signed_url_ttl_seconds: int = 3600

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStorageConfig":
        return cls(
            bucket=settings.storage_bucket,
            prefix=settings.offering_docs_prefix.strip("/"),
            max_file_size=settings.max_document_size,
            upload_url_ttl_seconds=settings.presigned_upload_ttl_seconds,
            signed_url_ttl_seconds=settings.signed_url_ttl_seconds,
        )


class StoragePathResolver:
    """Pure path functions over a fixed DocumentStorageConfig."""

    def __init__(self, config: DocumentStorageConfig) -> None:
        self.config = config

    @staticmethod
    def _join(offering_id: str, prefix: str, filename: str) -> str:
        if prefix:
            return f"{offering_id}/{prefix}/{filename}"
        return f"{offering_id}/{filename}"

    def canonical_path(self, offering_id: str, filename: str) -> str:
        """Key new uploads are written to."""
        return self._join(offering_id, self.config.prefix, filename)

    def legacy_path(self, offering_id: str, filename: str) -> str:
        """Key the same file would have had before the prefix was introduced."""
        return self._join(offering_id, "", filename)

    def candidate_paths(self, offering_id: str, filename: str) -> list[str]:
        """Keys to try when reading, newest layout first, without duplicates."""
        canonical = self.canonical_path(offering_id, filename)
        legacy = self.legacy_path(offering_id, filename)
        if legacy == canonical:
            return [canonical]
        return [canonical, legacy]

    @staticmethod
    def is_legacy_format(path: str) -> bool:
        """True iff the key has exactly two segments (offering_id/filename)."""
        return len(path.split("/")) == 2

    @staticmethod
    def split_storage_key(path: str) -> tuple[str, str]:
        """Return (offering_id, trailing filename) of a stored key.

        Raises:
            ValueError: If the key has fewer than two non-empty segments.
        """
        segments = path.split("/")
        if len(segments) < 2 or not segments[0] or not segments[-1]:
            raise ValueError(f"Invalid storage key: {path!r}")
        return segments[0], segments[-1]

    def migrated_path(self, path: str) -> str:
        """Canonical key for a legacy key; any other key is returned unchanged."""
        if not self.is_legacy_format(path):
            return path
        offering_id, filename = self.split_storage_key(path)
        return self.canonical_path(offering_id, filename)

    def candidates_for_key(self, storage_key: str) -> list[str]:
        """Stored key first, then the remaining layout candidates for its filename."""
        try:
            offering_id, filename = self.split_storage_key(storage_key)
        except ValueError:
            return [storage_key]
        paths = [storage_key]
        for candidate in self.candidate_paths(offering_id, filename):
            if candidate not in paths:
                paths.append(candidate)
        return paths
