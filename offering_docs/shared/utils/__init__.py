"""Shared utilities: datetime, generators, sanitization."""

from offering_docs.shared.utils.datetime import (
    ensure_utc,
    epoch_ms,
    expires_at,
    utc_now,
)
from offering_docs.shared.utils.generators import generate_cuid, random_base36
from offering_docs.shared.utils.sanitization import InputSanitizer, sanitize_title

__all__ = [
    "generate_cuid",
    "random_base36",
    "utc_now",
    "ensure_utc",
    "epoch_ms",
    "expires_at",
    "InputSanitizer",
    "sanitize_title",
]
