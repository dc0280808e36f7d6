"""MigrateLegacyDocumentPathsUseCase: rewrite legacy keys and move blobs."""

import pytest

from offering_docs.application.services.storage_paths import (
    DocumentStorageConfig,
    StoragePathResolver,
)
from offering_docs.application.use_cases.documents import MigrateLegacyDocumentPathsUseCase
from tests.fakes import make_document, pdf_bytes

LEGACY_KEY = "off_1/1600000000000_old_zzz999.pdf"
TARGET_KEY = "off_1/Documents/1600000000000_old_zzz999.pdf"


@pytest.fixture
def use_case(document_repo, memory_storage) -> MigrateLegacyDocumentPathsUseCase:
    paths = StoragePathResolver(DocumentStorageConfig(prefix="Documents"))
    return MigrateLegacyDocumentPathsUseCase(document_repo, memory_storage, paths)


async def test_moves_blob_and_rewrites_key(use_case, document_repo, memory_storage) -> None:
    doc = document_repo.add(make_document(storage_key=LEGACY_KEY))
    current = document_repo.add(make_document(checksum="9" * 64))
    memory_storage.blobs[LEGACY_KEY] = pdf_bytes()

    report = await use_case.run()

    assert report.scanned == 2
    assert report.migrated == [doc.id]
    assert report.already_canonical == [current.id]
    assert (await document_repo.get_by_id(doc.id)).storage_key == TARGET_KEY
    assert memory_storage.blobs == {TARGET_KEY: pdf_bytes()}


async def test_dry_run_changes_nothing(use_case, document_repo, memory_storage) -> None:
    doc = document_repo.add(make_document(storage_key=LEGACY_KEY))
    memory_storage.blobs[LEGACY_KEY] = pdf_bytes()

    report = await use_case.run(dry_run=True)

    assert report.migrated == [doc.id]
    assert (await document_repo.get_by_id(doc.id)).storage_key == LEGACY_KEY
    assert LEGACY_KEY in memory_storage.blobs


async def test_blob_already_at_target_only_updates_row(use_case, document_repo, memory_storage) -> None:
    doc = document_repo.add(make_document(storage_key=LEGACY_KEY))
    memory_storage.blobs[TARGET_KEY] = pdf_bytes()

    report = await use_case.run()

    assert report.migrated == [doc.id]
    assert (await document_repo.get_by_id(doc.id)).storage_key == TARGET_KEY


async def test_missing_blob_reported(use_case, document_repo) -> None:
    doc = document_repo.add(make_document(storage_key=LEGACY_KEY))
    report = await use_case.run()
    assert report.missing == [doc.id]
    assert (await document_repo.get_by_id(doc.id)).storage_key == LEGACY_KEY


async def test_scoped_to_offering(use_case, document_repo, memory_storage) -> None:
    document_repo.add(make_document(offering_id="off_2", storage_key="off_2/x_abc.pdf"))
    report = await use_case.run("off_1")
    assert report.scanned == 0
