"""Security: JWT handling and request authenticators."""

from offering_docs.infrastructure.security.authenticators import (
    FixedIdentityAuthenticator,
    JwtAuthenticator,
    build_authenticator,
)
from offering_docs.infrastructure.security.jwt import create_access_token, verify_token

__all__ = [
    "FixedIdentityAuthenticator",
    "JwtAuthenticator",
    "build_authenticator",
    "create_access_token",
    "verify_token",
]
