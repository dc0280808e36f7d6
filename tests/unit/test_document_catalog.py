"""DocumentCatalogService: listing, edits, idempotent delete, signed URLs and legacy fallback."""

from datetime import timedelta

import pytest

from offering_docs.domain.enums import DocumentCategory, DocumentVisibility
from offering_docs.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from offering_docs.infrastructure.exceptions import StorageNotFoundError
from offering_docs.shared.utils.datetime import utc_now
from tests.conftest import OFFERING_ID, OTHER_OFFERING_ID
from tests.fakes import make_document, pdf_bytes


@pytest.fixture
def stored(document_repo, memory_storage):
    """One document whose blob sits at its stored canonical key."""
    doc = document_repo.add(make_document())
    memory_storage.blobs[doc.storage_key] = pdf_bytes()
    return doc


@pytest.fixture
def legacy(document_repo, memory_storage):
    """Document whose metadata says canonical but whose blob is only at the legacy key."""
    doc = document_repo.add(make_document(filename="1600000000000_old_zzz999.pdf", checksum="1" * 64))
    memory_storage.blobs[f"{OFFERING_ID}/1600000000000_old_zzz999.pdf"] = pdf_bytes(b"old")
    return doc


class TestListDocuments:
    async def test_newest_first_and_audited(self, catalog_service, document_repo, audit_repo) -> None:
        now = utc_now()
        older = document_repo.add(make_document(checksum="a" * 64, uploaded_at=now - timedelta(days=1)))
        newer = document_repo.add(make_document(checksum="b" * 64, uploaded_at=now))
        document_repo.add(make_document(offering_id=OTHER_OFFERING_ID))

        docs = await catalog_service.list_documents("viewer-1", OFFERING_ID)
        assert [d.id for d in docs] == [newer.id, older.id]
        assert audit_repo.actions() == ["DOCUMENT_LIST"]
        assert audit_repo.entries[0].details["count"] == 2

    async def test_filters_are_case_insensitive(self, catalog_service, document_repo) -> None:
        legal = document_repo.add(
            make_document(checksum="a" * 64, category=DocumentCategory.LEGAL, visibility=DocumentVisibility.PUBLIC)
        )
        document_repo.add(make_document(checksum="b" * 64))

        docs = await catalog_service.list_documents(
            "viewer-1", OFFERING_ID, category="legal", visibility="PUBLIC"
        )
        assert [d.id for d in docs] == [legal.id]

    async def test_unknown_filter_values_ignored(self, catalog_service, document_repo) -> None:
        document_repo.add(make_document(checksum="a" * 64))
        document_repo.add(make_document(checksum="b" * 64))
        docs = await catalog_service.list_documents("viewer-1", OFFERING_ID, category="Nope")
        assert len(docs) == 2

    async def test_query_matches_title_or_filename(self, catalog_service, document_repo) -> None:
        rent_roll = document_repo.add(make_document(checksum="a" * 64, title="Rent roll"))
        by_name = document_repo.add(make_document(checksum="b" * 64, filename="1_appraisal_x.pdf"))
        document_repo.add(make_document(checksum="c" * 64, title="Other"))

        assert [d.id for d in await catalog_service.list_documents("viewer-1", OFFERING_ID, query="RENT")] == [
            rent_roll.id
        ]
        assert [d.id for d in await catalog_service.list_documents("viewer-1", OFFERING_ID, query="apprai")] == [
            by_name.id
        ]

    async def test_non_member_denied(self, catalog_service) -> None:
        with pytest.raises(AuthorizationException):
            await catalog_service.list_documents("stranger", OFFERING_ID)


class TestUpdateDocument:
    async def test_updates_fields(self, catalog_service, stored, audit_repo) -> None:
        updated = await catalog_service.update_document(
            "editor-1", stored.id, title=" New  title ", category="Legal", visibility="Public"
        )
        assert updated.title == "New title"
        assert updated.category is DocumentCategory.LEGAL
        assert updated.visibility is DocumentVisibility.PUBLIC
        assert audit_repo.actions() == ["DOCUMENT_EDIT"]

    async def test_no_fields(self, catalog_service, stored) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await catalog_service.update_document("editor-1", stored.id)
        assert exc_info.value.error_code == "NO_UPDATES"

    async def test_empty_title(self, catalog_service, stored) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await catalog_service.update_document("editor-1", stored.id, title="   ")
        assert exc_info.value.error_code == "INVALID_TITLE"

    async def test_invalid_category(self, catalog_service, stored) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await catalog_service.update_document("editor-1", stored.id, category="Marketing")
        assert exc_info.value.error_code == "INVALID_CATEGORY"

    async def test_viewer_denied(self, catalog_service, stored) -> None:
        with pytest.raises(AuthorizationException):
            await catalog_service.update_document("viewer-1", stored.id, title="x")

    async def test_unknown_document(self, catalog_service) -> None:
        with pytest.raises(ResourceNotFoundException):
            await catalog_service.update_document("editor-1", "missing", title="x")


class TestDeleteDocument:
    async def test_deletes_blob_and_row(self, catalog_service, stored, document_repo, memory_storage, audit_repo) -> None:
        await catalog_service.delete_document("manager-1", stored.id)
        assert stored.id not in document_repo.documents
        assert memory_storage.blobs == {}
        assert audit_repo.actions() == ["DOCUMENT_DELETE"]

    async def test_delete_twice_is_a_no_op(self, catalog_service, stored, document_repo) -> None:
        await catalog_service.delete_document("manager-1", stored.id)
        await catalog_service.delete_document("manager-1", stored.id)
        assert document_repo.documents == {}

    async def test_editor_cannot_delete(self, catalog_service, stored, document_repo) -> None:
        with pytest.raises(AuthorizationException):
            await catalog_service.delete_document("editor-1", stored.id)
        assert stored.id in document_repo.documents

    async def test_blob_failure_still_removes_row(self, catalog_service, stored, document_repo, memory_storage) -> None:
        memory_storage.fail_delete = True
        await catalog_service.delete_document("manager-1", stored.id)
        assert stored.id not in document_repo.documents

    async def test_legacy_blob_deleted(self, catalog_service, legacy, memory_storage) -> None:
        await catalog_service.delete_document("owner-1", legacy.id)
        assert memory_storage.blobs == {}


class TestSignedUrls:
    async def test_view_url_increments_count(self, catalog_service, stored, audit_repo) -> None:
        first = await catalog_service.view_url("viewer-1", stored.id)
        second = await catalog_service.view_url("viewer-1", stored.id)
        assert first.signed_url == f"memory://{stored.storage_key}?mode=inline&ttl=3600"
        assert first.expires_in == 3600
        assert (first.download_count, second.download_count) == (1, 2)
        assert audit_repo.actions() == ["DOCUMENT_VIEW", "DOCUMENT_VIEW"]

    async def test_download_url_is_attachment(self, catalog_service, stored, audit_repo) -> None:
        result = await catalog_service.download_url("viewer-1", stored.id)
        assert "mode=attachment" in result.signed_url
        assert audit_repo.actions() == ["DOCUMENT_DOWNLOAD"]

    async def test_legacy_fallback_is_transparent(self, catalog_service, legacy, document_repo) -> None:
        result = await catalog_service.view_url("viewer-1", legacy.id)
        assert result.signed_url.startswith(f"memory://{OFFERING_ID}/1600000000000_old_zzz999.pdf")
        assert (await document_repo.get_by_id(legacy.id)).storage_key == legacy.storage_key

    async def test_missing_blob_is_not_found(self, catalog_service, document_repo) -> None:
        doc = document_repo.add(make_document())
        with pytest.raises(StorageNotFoundError):
            await catalog_service.view_url("viewer-1", doc.id)
        assert (await document_repo.get_by_id(doc.id)).download_count == 0

    async def test_non_member_denied(self, catalog_service, stored) -> None:
        with pytest.raises(AuthorizationException):
            await catalog_service.download_url("stranger", stored.id)


class TestDownload:
    async def test_returns_bytes_and_safe_filename(self, catalog_service, document_repo, memory_storage) -> None:
        doc = document_repo.add(make_document(filename='1_my "deal" memo_abc123.pdf'))
        memory_storage.blobs[doc.storage_key] = pdf_bytes(b"memo")
        content = await catalog_service.download("viewer-1", doc.id)
        assert content.data == pdf_bytes(b"memo")
        assert content.filename == "1_my__deal__memo_abc123.pdf"
        assert content.mime_type == "application/pdf"
        assert content.download_count == 1

    async def test_legacy_download(self, catalog_service, legacy) -> None:
        content = await catalog_service.download("viewer-1", legacy.id)
        assert content.data == pdf_bytes(b"old")
