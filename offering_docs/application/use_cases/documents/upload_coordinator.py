"""Two-phase document upload: presign a direct transfer, then confirm it.

presign never sees bytes; confirm downloads what the client actually sent and
validates it before a document row exists.
"""

from __future__ import annotations

import logging
import re
from datetime import timedelta

from offering_docs.application.dtos.document import (
    ConfirmRequest,
    DocumentCreate,
    DocumentResult,
    PresignedUploadResult,
    PresignRequest,
    UploadMetadata,
)
from offering_docs.application.interfaces.repositories import IDocumentRepository
from offering_docs.application.interfaces.services import (
    IAccessGate,
    IDocumentAuditService,
)
from offering_docs.application.interfaces.storage import IStorageService
from offering_docs.application.services.dedup_index import DedupIndex, sha256_hex
from offering_docs.application.services.document_content_validator import (
    DocumentContentValidator,
)
from offering_docs.application.services.storage_fallback import StorageBlobLocator
from offering_docs.application.services.storage_paths import (
    DocumentStorageConfig,
    StoragePathResolver,
)
from offering_docs.domain.enums import (
    DocumentAuditAction,
    DocumentCategory,
    DocumentVisibility,
    Permission,
    UploadState,
)
from offering_docs.domain.exceptions import (
    DuplicateDocumentException,
    OfferingDocsException,
    ValidationException,
)
from offering_docs.infrastructure.exceptions import (
    StorageException,
    StorageNotFoundError,
    StorageUploadError,
)
from offering_docs.shared.utils.datetime import epoch_ms
from offering_docs.shared.utils.generators import generate_cuid, random_base36
from offering_docs.shared.utils.sanitization import sanitize_title

logger = logging.getLogger(__name__)

MAX_FILENAME_LENGTH = 255
SUFFIX_LENGTH = 6
# Bounded retries when a generated key is already taken.
MAX_PATH_ATTEMPTS = 5

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_RESERVED_NAMES = frozenset(
    {"CON", "PRN", "AUX", "NUL"}
    | {f"COM{i}" for i in range(1, 10)}
    | {f"LPT{i}" for i in range(1, 10)}
)


def _split_extension(name: str) -> tuple[str, str]:
    """Return (base, '.ext'); a leading dot does not start an extension."""
    dot = name.rfind(".")
    if dot > 0:
        return name[:dot], name[dot:]
    return name, ""


def sanitize_filename(filename: str, add_suffix: bool = True) -> str:
    """Make a client filename safe to use as the last segment of a blob key.

    Path separators, reserved punctuation and control characters become '_',
    '..' sequences are neutralized and leading dots removed. A random base36
    suffix is appended before the extension and the result is capped at
    255 characters.

    Raises:
        ValidationException: Empty after cleanup or a reserved device name.
    """
    name = _UNSAFE_CHARS.sub("_", filename or "")
    name = name.replace("..", "_").lstrip(".").strip()
    base, extension = _split_extension(name)
    if not base.strip(" _"):
        raise ValidationException(
            "Filename is empty or invalid after sanitization",
            field="filename",
            error_code="INVALID_FILENAME",
        )
    if base.strip().upper() in _RESERVED_NAMES:
        raise ValidationException(
            f"Reserved filename: {base}", field="filename", error_code="INVALID_FILENAME"
        )
    if add_suffix:
        room = MAX_FILENAME_LENGTH - len(extension) - SUFFIX_LENGTH - 1
        return f"{base[:room]}_{random_base36(SUFFIX_LENGTH)}{extension}"
    room = MAX_FILENAME_LENGTH - len(extension)
    return f"{base[:room]}{extension}"


def build_storage_filename(sanitized: str, timestamp_ms: int | None = None) -> str:
    """Prefix a sanitized filename with epoch milliseconds so keys sort by upload time."""
    return f"{timestamp_ms if timestamp_ms is not None else epoch_ms()}_{sanitized}"


def default_title(filename: str) -> str:
    """Filename without its extension."""
    return _split_extension(filename)[0]


def parse_category(raw: str | None) -> DocumentCategory:
    try:
        return DocumentCategory(raw)
    except ValueError:
        raise ValidationException(
            f"Category must be one of {DocumentCategory.values()}",
            field="category",
            error_code="INVALID_CATEGORY",
        ) from None


def parse_visibility(raw: str | None) -> DocumentVisibility:
    try:
        return DocumentVisibility(raw)
    except ValueError:
        raise ValidationException(
            f"Visibility must be one of {DocumentVisibility.values()}",
            field="visibility",
            error_code="INVALID_VISIBILITY",
        ) from None


class DocumentUploadService:
    """Single responsibility: presigned upload and confirmation of offering documents."""

    def __init__(
        self,
        storage_service: IStorageService,
        document_repo: IDocumentRepository,
        access_gate: IAccessGate,
        audit: IDocumentAuditService,
        config: DocumentStorageConfig,
    ) -> None:
        self.storage = storage_service
        self.document_repo = document_repo
        self.access_gate = access_gate
        self.audit = audit
        self.config = config
        self.paths = StoragePathResolver(config)
        self.validator = DocumentContentValidator(config.max_file_size)
        self.locator = StorageBlobLocator(storage_service, self.paths)
        self.dedup = DedupIndex(document_repo)

    async def _allocate_path(self, offering_id: str, filename: str) -> tuple[str, str]:
        """Return (sanitized filename, canonical key) for a key not yet in storage."""
        for _ in range(MAX_PATH_ATTEMPTS):
            sanitized = sanitize_filename(filename)
            path = self.paths.canonical_path(offering_id, build_storage_filename(sanitized))
            if not await self.storage.exists(path):
                return sanitized, path
            logger.info("Storage key collision at %s, regenerating suffix", path)
        raise StorageUploadError(path, "could not allocate a free storage key")

    async def presign(
        self, user_id: str, offering_id: str, request: PresignRequest
    ) -> PresignedUploadResult:
        """Authorize, validate declared metadata and issue a write URL.

        Rejected uploads (size, type, category) never receive a URL.
        """
        await self.access_gate.authorize(user_id, offering_id, Permission.WRITE)
        if not request.filename or not request.mime_type or not request.size:
            raise ValidationException(
                "filename, mimeType and size are required", error_code="NO_FILE"
            )
        category = parse_category(request.category)
        visibility = parse_visibility(request.visibility)
        self.validator.validate(request.filename, request.mime_type, request.size)

        sanitized, path = await self._allocate_path(offering_id, request.filename)
        upload = await self.storage.generate_upload_url(
            path,
            content_type=request.mime_type,
            expiration=timedelta(seconds=self.config.upload_url_ttl_seconds),
        )
        title = sanitize_title(request.title or "") or default_title(request.filename)
        logger.info(
            "Upload %s for offering %s at %s", UploadState.PRESIGNED.value, offering_id, path
        )
        return PresignedUploadResult(
            upload_url=upload.url,
            token=upload.token,
            path=upload.path,
            expires_in=self.config.upload_url_ttl_seconds,
            metadata=UploadMetadata(
                offering_id=offering_id,
                title=title,
                filename=sanitized,
                category=category,
                visibility=visibility,
                mime_type=request.mime_type,
                size=request.size,
            ),
        )

    def _check_path_matches(self, offering_id: str, path: str, filename: str) -> None:
        segments = path.split("/")
        trailing = segments[-1]
        if (
            len(segments) < 2
            or segments[0] != offering_id
            or ".." in segments
            or not (trailing == filename or trailing.endswith(f"_{filename}"))
        ):
            raise ValidationException(
                "Upload path does not match the offering or filename",
                field="path",
                error_code="METADATA_MISMATCH",
            )

    async def _owner_of(self, offering_id: str, path: str) -> DocumentResult | None:
        """Document whose blob is at path under any key layout, if any."""
        for candidate in self.paths.candidates_for_key(path):
            owner = await self.document_repo.get_by_storage_key(offering_id, candidate)
            if owner is not None:
                return owner
        return None

    async def _discard(self, offering_id: str, path: str, reason: UploadState) -> None:
        """Remove a rejected blob unless a document row still references it.

        Failures are logged, never raised.
        """
        try:
            owner = await self._owner_of(offering_id, path)
        except Exception as exc:
            logger.warning("Keeping blob %s (%s): owner lookup failed: %s", path, reason.value, exc)
            return
        if owner is not None:
            logger.warning(
                "Keeping blob %s (%s): it belongs to document %s", path, reason.value, owner.id
            )
            return
        try:
            if not await self.storage.delete(path):
                logger.warning("Blob %s already gone while discarding (%s)", path, reason.value)
        except StorageException as exc:
            logger.warning("Failed to discard blob %s (%s): %s", path, reason.value, exc)

    async def confirm(
        self, user_id: str, offering_id: str, request: ConfirmRequest
    ) -> DocumentResult:
        """Verify the transferred bytes and create the document row.

        Any rejection after the bytes were found removes the blob before
        the error propagates, unless a document already owns that key.
        """
        await self.access_gate.authorize(user_id, offering_id, Permission.WRITE)
        if not request.path or not request.filename or not request.category or not request.visibility:
            raise ValidationException(
                "path, filename, category and visibility are required",
                error_code="MISSING_METADATA",
            )
        self._check_path_matches(offering_id, request.path, request.filename)
        category = parse_category(request.category)
        visibility = parse_visibility(request.visibility)

        try:
            found = await self.locator.download(request.path)
        except StorageNotFoundError:
            raise ValidationException(
                "Uploaded file could not be found in storage",
                field="path",
                error_code="UPLOAD_VERIFICATION_FAILED",
            ) from None
        data, actual_path = found.value, found.actual_path

        # A key that already backs a document is never re-validated or discarded.
        owner = await self._owner_of(offering_id, actual_path)
        if owner is not None:
            logger.info(
                "Upload %s: %s already belongs to document %s",
                UploadState.DUPLICATE.value,
                actual_path,
                owner.id,
            )
            raise DuplicateDocumentException(
                offering_id, owner.checksum_sha256, owner.id, owner.title
            )

        try:
            self.validator.validate(request.filename, request.mime_type, request.size, data)
        except OfferingDocsException:
            await self._discard(offering_id, actual_path, UploadState.REJECTED)
            raise

        checksum = sha256_hex(data)
        existing = await self.dedup.existing(offering_id, checksum)
        if existing is not None:
            await self._discard(offering_id, actual_path, UploadState.DUPLICATE)
            raise DuplicateDocumentException(
                offering_id, checksum, existing.id, existing.title
            )

        title = sanitize_title(request.title or "") or default_title(request.filename)
        create = DocumentCreate(
            id=generate_cuid(),
            offering_id=offering_id,
            title=title,
            filename=request.filename,
            mime_type=request.mime_type.strip().lower(),
            size_bytes=len(data),
            category=category,
            visibility=visibility,
            storage_key=actual_path,
            checksum_sha256=checksum,
            uploaded_by=user_id,
        )
        try:
            document = await self.document_repo.create_document(create)
        except DuplicateDocumentException:
            await self._discard(offering_id, actual_path, UploadState.DUPLICATE)
            raise
        except Exception:
            await self._discard(offering_id, actual_path, UploadState.REJECTED)
            raise

        logger.info(
            "Upload %s: document %s in offering %s at %s",
            UploadState.CONFIRMED.value,
            document.id,
            offering_id,
            actual_path,
        )
        await self.audit.record(
            DocumentAuditAction.UPLOAD,
            user_id,
            document_id=document.id,
            offering_id=offering_id,
            metadata={
                "filename": document.filename,
                "size": document.size_bytes,
                "category": category.value,
                "visibility": visibility.value,
            },
        )
        return document
