"""Shared telemetry: logging setup."""

from offering_docs.shared.telemetry.logging import (
    RequestIdLogFilter,
    get_logger,
    request_id_var,
    setup_logging,
)

__all__ = ["RequestIdLogFilter", "get_logger", "request_id_var", "setup_logging"]
