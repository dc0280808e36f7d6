"""Move documents stored under legacy keys ({offering_id}/{file}) to the current layout.

Usage:
    uv run python -m scripts.migrate_legacy_document_paths [offering_id] [--dry-run]
If offering_id is omitted, processes every document.
Requires DATABASE_URL and the storage settings the API uses.
"""

import argparse
import asyncio
import sys

import offering_docs.infrastructure.persistence.database as database
from offering_docs.application.services import DocumentStorageConfig, StoragePathResolver
from offering_docs.application.use_cases.documents import MigrateLegacyDocumentPathsUseCase
from offering_docs.core.config import get_settings
from offering_docs.infrastructure.external.storage import StorageFactory
from offering_docs.infrastructure.persistence.repositories import DocumentRepository
from offering_docs.shared.telemetry import setup_logging


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("offering_id", nargs="?", default=None)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would move without touching storage or rows",
    )
    return parser.parse_args()


async def main() -> None:
    """Run the migration in one transaction and print a summary."""
    args = _parse_args()
    settings = get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    storage = StorageFactory.create_storage_service(settings)
    paths = StoragePathResolver(DocumentStorageConfig.from_settings(settings))
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            use_case = MigrateLegacyDocumentPathsUseCase(
                DocumentRepository(session), storage, paths
            )
            report = await use_case.run(args.offering_id, dry_run=args.dry_run)
    await database.dispose_engine()

    label = "would migrate" if args.dry_run else "migrated"
    print(f"Scanned {report.scanned} documents")
    print(f"  {label}: {len(report.migrated)}")
    print(f"  already current: {len(report.already_canonical)}")
    print(f"  blob missing: {len(report.missing)}")
    print(f"  failed: {len(report.failed)}")
    for document_id, error_code in report.failed.items():
        print(f"    {document_id}: {error_code}", file=sys.stderr)
    if report.failed:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
