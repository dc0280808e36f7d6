"""Content-addressed duplicate detection scoped to one offering."""

import hashlib

from offering_docs.application.dtos.document import DocumentResult
from offering_docs.application.interfaces.repositories import IDocumentRepository


def sha256_hex(data: bytes) -> str:
    """Lowercase hex SHA-256 of data."""
    return hashlib.sha256(data).hexdigest()


class DedupIndex:
    """Checksum lookup per offering.

    This is the fast path; the unique index on (offering_id, checksum_sha256)
    still decides concurrent confirms, surfaced by the repository as
    DuplicateDocumentException.
    """

    def __init__(self, document_repo: IDocumentRepository) -> None:
        self.document_repo = document_repo

    async def existing(self, offering_id: str, checksum: str) -> DocumentResult | None:
        return await self.document_repo.get_by_checksum(offering_id, checksum)
