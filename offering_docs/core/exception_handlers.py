"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses with the body {"error", "message", "details"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from offering_docs.core.config import get_settings
from offering_docs.domain.exceptions import OfferingDocsException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status; unmapped codes are 400.
_ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_ERROR": 401,
    "ACCESS_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "STORAGE_NOT_FOUND": 404,
    "DUPLICATE_FILE": 409,
    "FILE_TOO_LARGE": 413,
    "ONLY_PDF_ALLOWED": 415,
    "DATABASE_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
    "STORAGE_TOKEN_INVALID": 403,
    "STORAGE_PERMISSION_ERROR": 403,
}


def status_for_error_code(error_code: str) -> int:
    """HTTP status for a domain error code. Storage failures are server errors."""
    if error_code in _ERROR_CODE_STATUS:
        return _ERROR_CODE_STATUS[error_code]
    if error_code.startswith("STORAGE_"):
        return 500
    return 400


def _offering_docs_exception_handler(
    request: Request, exc: OfferingDocsException
) -> JSONResponse:
    """Return JSON from OfferingDocsException.to_dict() with appropriate status code."""
    status = status_for_error_code(exc.error_code)
    if status >= 500:
        logger.error("%s on %s: %s %s", exc.error_code, request.url.path, exc.message, exc.details)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
        headers=headers,
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with validation error details."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": jsonable_errors(exc)},
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Pydantic errors without the raw input or ctx (may hold non-JSON values)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail, "details": {}},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail, "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: OfferingDocsException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(OfferingDocsException, _offering_docs_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
