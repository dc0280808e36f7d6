"""StoragePathResolver: canonical and legacy key layout."""

import pytest

from offering_docs.application.services.storage_paths import (
    DocumentStorageConfig,
    StoragePathResolver,
)


@pytest.fixture
def paths() -> StoragePathResolver:
    return StoragePathResolver(DocumentStorageConfig(prefix="Documents"))


def test_canonical_path_includes_prefix(paths: StoragePathResolver) -> None:
    assert paths.canonical_path("off_1", "a.pdf") == "off_1/Documents/a.pdf"


def test_canonical_path_without_prefix_is_legacy_layout() -> None:
    paths = StoragePathResolver(DocumentStorageConfig(prefix=""))
    assert paths.canonical_path("off_1", "a.pdf") == "off_1/a.pdf"
    assert paths.candidate_paths("off_1", "a.pdf") == ["off_1/a.pdf"]


def test_legacy_path(paths: StoragePathResolver) -> None:
    assert paths.legacy_path("off_1", "a.pdf") == "off_1/a.pdf"


def test_candidate_paths_newest_layout_first(paths: StoragePathResolver) -> None:
    assert paths.candidate_paths("off_1", "a.pdf") == [
        "off_1/Documents/a.pdf",
        "off_1/a.pdf",
    ]


@pytest.mark.parametrize(
    ("key", "legacy"),
    [
        ("off_1/a.pdf", True),
        ("off_1/Documents/a.pdf", False),
        ("a.pdf", False),
        ("off_1/x/y/a.pdf", False),
    ],
)
def test_is_legacy_format(key: str, legacy: bool) -> None:
    assert StoragePathResolver.is_legacy_format(key) is legacy


def test_split_storage_key_rejects_single_segment() -> None:
    with pytest.raises(ValueError, match="Invalid storage key"):
        StoragePathResolver.split_storage_key("a.pdf")


def test_migrated_path(paths: StoragePathResolver) -> None:
    assert paths.migrated_path("off_1/a.pdf") == "off_1/Documents/a.pdf"
    assert paths.migrated_path("off_1/Documents/a.pdf") == "off_1/Documents/a.pdf"


def test_candidates_for_legacy_key_tries_stored_key_first(paths: StoragePathResolver) -> None:
    assert paths.candidates_for_key("off_1/a.pdf") == [
        "off_1/a.pdf",
        "off_1/Documents/a.pdf",
    ]


def test_candidates_for_canonical_key(paths: StoragePathResolver) -> None:
    assert paths.candidates_for_key("off_1/Documents/a.pdf") == [
        "off_1/Documents/a.pdf",
        "off_1/a.pdf",
    ]


def test_config_from_settings_strips_slashes() -> None:
    from offering_docs.core.config import get_settings

    settings = get_settings().model_copy(update={"offering_docs_prefix": "/Docs/"})
    config = DocumentStorageConfig.from_settings(settings)
    assert config.prefix == "Docs"
    assert config.bucket == settings.storage_bucket
