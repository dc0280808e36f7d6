"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See offering_docs.core.lifespan and
offering_docs.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from offering_docs.api.v1 import api_router
from offering_docs.application.interfaces.services import IAuthenticator
from offering_docs.application.interfaces.storage import IStorageService
from offering_docs.application.services import DocumentStorageConfig
from offering_docs.core.config import get_settings
from offering_docs.core.exception_handlers import register_exception_handlers
from offering_docs.core.lifespan import create_lifespan
from offering_docs.core.limiter import limiter
from offering_docs.infrastructure.external.storage import StorageFactory
from offering_docs.infrastructure.external.storage.local_storage import (
    DOWNLOAD_ROUTE,
    UPLOAD_ROUTE,
)
from offering_docs.infrastructure.security import build_authenticator
from offering_docs.middleware import (
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from offering_docs.shared.telemetry import setup_logging

# JSON bodies on every other route are small.
MAX_JSON_BODY = 1024 * 1024


def create_app(
    authenticator: IAuthenticator | None = None,
    storage: IStorageService | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        authenticator: Overrides the one selected by AUTH_MODE (tests, embedding).
        storage: Overrides the backend selected by STORAGE_BACKEND.
    """
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.settings = settings
    app.state.storage_config = DocumentStorageConfig.from_settings(settings)
    app.state.storage = storage or StorageFactory.create_storage_service(settings)
    app.state.authenticator = authenticator or build_authenticator(settings)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost. Order: timeout → size limit → request ID → security → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, frameable_prefixes=(DOWNLOAD_ROUTE,))
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=MAX_JSON_BODY,
        path_limits={UPLOAD_ROUTE: settings.max_document_size},
    )
    app.add_middleware(
        TimeoutMiddleware,
        timeout_seconds=settings.request_timeout_seconds,
        exempt_prefixes=(UPLOAD_ROUTE, DOWNLOAD_ROUTE),
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
