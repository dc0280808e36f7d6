"""PDF content validation: size ceiling, declared type, extension and signature."""

from offering_docs.domain.exceptions import (
    FileTooLargeException,
    UnsupportedFileTypeException,
    ValidationException,
)

PDF_MIME_TYPE = "application/pdf"
PDF_EXTENSION = "pdf"
PDF_MAGIC = b"%PDF-"


class DocumentContentValidator:
    """Validates uploads independently of client-declared metadata.

    Without bytes only the cheap checks run (presign); with bytes the actual
    size and the magic signature are verified too (confirm).
    """

    def __init__(self, max_file_size: int) -> None:
        self.max_file_size = max_file_size

    def validate(
        self,
        filename: str,
        mime_type: str,
        declared_size: int,
        data: bytes | None = None,
    ) -> None:
        """Raise on the first failing rule; return None when valid.

        Raises:
            ValidationException: declared size is negative.
            FileTooLargeException: declared or actual size over the ceiling.
            UnsupportedFileTypeException: MIME type, extension or signature is not PDF.
        """
        if declared_size < 0:
            raise ValidationException("Size must be a non-negative integer", "size")
        if declared_size > self.max_file_size:
            raise FileTooLargeException(declared_size, self.max_file_size)
        if data is not None and len(data) > self.max_file_size:
            raise FileTooLargeException(len(data), self.max_file_size)
        if (mime_type or "").strip().lower() != PDF_MIME_TYPE:
            raise UnsupportedFileTypeException(f"mime type {mime_type!r}")
        if extension_of(filename) != PDF_EXTENSION:
            raise UnsupportedFileTypeException(f"extension of {filename!r}")
        if data is not None and not data.startswith(PDF_MAGIC):
            raise UnsupportedFileTypeException("content is not a PDF")


def extension_of(filename: str) -> str:
    """Lowercased text after the last dot, or '' when there is none."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()
