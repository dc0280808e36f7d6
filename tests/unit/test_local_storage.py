"""LocalStorageService: atomic writes, traversal protection and transfer tokens."""

from datetime import timedelta

import pytest

from offering_docs.infrastructure.exceptions import (
    StorageNotFoundError,
    StoragePermissionError,
    StorageTokenError,
)
from offering_docs.infrastructure.external.storage.local_storage import (
    DOWNLOAD_ROUTE,
    UPLOAD_ROUTE,
    LocalStorageService,
)


@pytest.fixture
def storage(tmp_path) -> LocalStorageService:
    return LocalStorageService(str(tmp_path), base_url="https://api.example.com/")


async def test_upload_download_delete(storage: LocalStorageService, tmp_path) -> None:
    await storage.upload(b"%PDF-1", "off_1/Documents/a.pdf", "application/pdf")
    assert await storage.exists("off_1/Documents/a.pdf")
    assert await storage.download("off_1/Documents/a.pdf") == b"%PDF-1"
    assert (tmp_path / "off_1/Documents/a.pdf.meta.json").exists()

    assert await storage.delete("off_1/Documents/a.pdf") is True
    assert not (tmp_path / "off_1").exists()
    assert await storage.delete("off_1/Documents/a.pdf") is False


async def test_upload_overwrites(storage: LocalStorageService) -> None:
    await storage.upload(b"one", "k/a.pdf", "application/pdf")
    await storage.upload(b"two", "k/a.pdf", "application/pdf")
    assert await storage.download("k/a.pdf") == b"two"


async def test_download_missing(storage: LocalStorageService) -> None:
    with pytest.raises(StorageNotFoundError):
        await storage.download("nope/a.pdf")


async def test_traversal_rejected(storage: LocalStorageService) -> None:
    with pytest.raises(StoragePermissionError):
        await storage.upload(b"x", "../escape.pdf", "application/pdf")
    assert await storage.exists("../../etc/passwd") is False


async def test_upload_token_is_single_use(storage: LocalStorageService) -> None:
    upload = await storage.generate_upload_url("off_1/a.pdf", "application/pdf")
    assert upload.url == f"https://api.example.com{UPLOAD_ROUTE}/{upload.token}"
    assert upload.path == "off_1/a.pdf"

    grant = storage.consume_upload_token(upload.token, "application/pdf; charset=binary")
    assert grant.storage_ref == "off_1/a.pdf"
    with pytest.raises(StorageTokenError):
        storage.consume_upload_token(upload.token, "application/pdf")


async def test_upload_token_bound_to_content_type(storage: LocalStorageService) -> None:
    upload = await storage.generate_upload_url("off_1/a.pdf", "application/pdf")
    with pytest.raises(StorageTokenError):
        storage.consume_upload_token(upload.token, "text/html")


async def test_expired_upload_token(storage: LocalStorageService) -> None:
    upload = await storage.generate_upload_url(
        "off_1/a.pdf", "application/pdf", expiration=timedelta(seconds=-1)
    )
    with pytest.raises(StorageTokenError):
        storage.consume_upload_token(upload.token, "application/pdf")


async def test_download_url_requires_existing_blob(storage: LocalStorageService) -> None:
    with pytest.raises(StorageNotFoundError):
        await storage.generate_download_url("off_1/a.pdf")


async def test_download_token(storage: LocalStorageService) -> None:
    await storage.upload(b"%PDF-1", "off_1/a.pdf", "application/pdf")
    url = await storage.generate_download_url("off_1/a.pdf", download=True, filename="a.pdf")
    token = url.rsplit("/", 1)[1]
    assert url.startswith(f"https://api.example.com{DOWNLOAD_ROUTE}/")

    grant = storage.validate_download_token(token)
    assert grant is not None
    assert (grant.storage_ref, grant.download, grant.filename) == ("off_1/a.pdf", True, "a.pdf")
    assert storage.validate_download_token("bogus") is None
