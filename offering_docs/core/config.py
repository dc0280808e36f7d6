"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. DATABASE_URL, SECRET_KEY) are
validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_storage (database_url, secret_key in jwt mode,
    and storage backend when applicable).
    """

    # App
    app_name: str = "offering-documents"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None
    db_disable_jit: bool = True

    # Authentication: "jwt" verifies bearer tokens; "fixed" resolves every
    # request to fixed_identity_user_id (local development and tests only).
    auth_mode: str = "jwt"
    fixed_identity_user_id: str = ""
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Storage
    storage_backend: str = "local"
    storage_root: str = "/var/offering-docs/storage"
    storage_base_url: str | None = None
    storage_bucket: str = "offering-media"
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key: str | None = None
    s3_secret_key: SecretStr | None = None

    # Offering documents
    offering_docs_prefix: str = "Documents"
    max_document_size: int = 25 * 1024 * 1024  # 25 MiB
    presigned_upload_ttl_seconds: int = 600
    signed_url_ttl_seconds: int = 3600

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_storage(self) -> "Settings":
        """Validate required env, auth mode and storage backend.

        - DATABASE_URL always required.
        - jwt mode: SECRET_KEY required.
        - fixed mode: FIXED_IDENTITY_USER_ID required, refused in production.
        """
        if not self.database_url:
            raise ValueError(
                "DATABASE_URL is required. Set in environment or .env file."
            )
        if self.auth_mode == "jwt":
            if not self.secret_key.get_secret_value():
                raise ValueError(
                    "SECRET_KEY is required when AUTH_MODE is 'jwt'. "
                    "Generate with: openssl rand -hex 32."
                )
        elif self.auth_mode == "fixed":
            if self.environment.lower() == "production":
                raise ValueError(
                    "AUTH_MODE 'fixed' is not allowed when ENVIRONMENT is 'production'."
                )
            if not self.fixed_identity_user_id:
                raise ValueError(
                    "FIXED_IDENTITY_USER_ID is required when AUTH_MODE is 'fixed'."
                )
        else:
            raise ValueError(
                f"auth_mode must be 'jwt' or 'fixed', got: {self.auth_mode!r}"
            )
        if self.storage_backend not in ("local", "s3"):
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. "
                "Must be one of: 'local', 's3'"
            )
        if not self.storage_bucket:
            raise ValueError("STORAGE_BUCKET must not be empty.")
        if self.max_document_size <= 0:
            raise ValueError("MAX_DOCUMENT_SIZE must be positive.")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
