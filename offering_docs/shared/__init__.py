"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from offering_docs.shared.utils import (
    ensure_utc,
    epoch_ms,
    expires_at,
    generate_cuid,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "epoch_ms",
    "expires_at",
]
