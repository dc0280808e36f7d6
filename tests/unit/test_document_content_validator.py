"""DocumentContentValidator: size, declared type, extension and PDF signature."""

import pytest

from offering_docs.application.services.document_content_validator import (
    DocumentContentValidator,
    extension_of,
)
from offering_docs.domain.exceptions import (
    FileTooLargeException,
    UnsupportedFileTypeException,
    ValidationException,
)

MAX = 1000


@pytest.fixture
def validator() -> DocumentContentValidator:
    return DocumentContentValidator(MAX)


def test_valid_declared_metadata_passes(validator: DocumentContentValidator) -> None:
    validator.validate("report.pdf", "application/pdf", 10)


def test_valid_bytes_pass(validator: DocumentContentValidator) -> None:
    validator.validate("Report.PDF", "Application/PDF", 10, b"%PDF-1.4 body")


def test_size_at_limit_is_allowed(validator: DocumentContentValidator) -> None:
    validator.validate("a.pdf", "application/pdf", MAX)


def test_declared_size_over_limit(validator: DocumentContentValidator) -> None:
    with pytest.raises(FileTooLargeException) as exc_info:
        validator.validate("a.pdf", "application/pdf", MAX + 1)
    assert exc_info.value.error_code == "FILE_TOO_LARGE"
    assert exc_info.value.details == {"size": MAX + 1, "max_size": MAX}


def test_actual_size_over_limit_even_if_declared_small(validator: DocumentContentValidator) -> None:
    data = b"%PDF-" + b"x" * MAX
    with pytest.raises(FileTooLargeException):
        validator.validate("a.pdf", "application/pdf", 10, data)


def test_size_checked_before_type(validator: DocumentContentValidator) -> None:
    with pytest.raises(FileTooLargeException):
        validator.validate("a.exe", "application/x-msdownload", MAX + 1)


def test_negative_size(validator: DocumentContentValidator) -> None:
    with pytest.raises(ValidationException):
        validator.validate("a.pdf", "application/pdf", -1)


@pytest.mark.parametrize("mime", ["image/png", "application/octet-stream", ""])
def test_wrong_mime_type(validator: DocumentContentValidator, mime: str) -> None:
    with pytest.raises(UnsupportedFileTypeException) as exc_info:
        validator.validate("a.pdf", mime, 10)
    assert exc_info.value.error_code == "ONLY_PDF_ALLOWED"


@pytest.mark.parametrize("name", ["a.txt", "a", "a.pdf.exe", "pdf"])
def test_wrong_extension(validator: DocumentContentValidator, name: str) -> None:
    with pytest.raises(UnsupportedFileTypeException):
        validator.validate(name, "application/pdf", 10)


def test_forged_content_rejected(validator: DocumentContentValidator) -> None:
    with pytest.raises(UnsupportedFileTypeException) as exc_info:
        validator.validate("a.pdf", "application/pdf", 10, b"MZ\x90\x00 not a pdf")
    assert exc_info.value.details["reason"] == "content is not a PDF"


def test_empty_content_rejected(validator: DocumentContentValidator) -> None:
    with pytest.raises(UnsupportedFileTypeException):
        validator.validate("a.pdf", "application/pdf", 0, b"")


def test_extension_of() -> None:
    assert extension_of("x.tar.PDF") == "pdf"
    assert extension_of("noext") == ""
