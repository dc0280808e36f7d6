"""Authenticator implementations, selected once when the app is built.

Request handling only ever sees an IAuthenticator; which one is wired is a
configuration decision (AUTH_MODE), never a per-request branch.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from offering_docs.application.interfaces.services import (
    AuthenticatedUser,
    IAuthenticator,
)
from offering_docs.domain.exceptions import AuthenticationException
from offering_docs.infrastructure.security.jwt import verify_token

if TYPE_CHECKING:
    from offering_docs.core.config import Settings

logger = logging.getLogger(__name__)


class JwtAuthenticator:
    """Verifies bearer JWTs; the sub claim is the user id."""

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        if not secret_key:
            raise ValueError("JwtAuthenticator requires a secret key")
        self._secret_key = secret_key
        self._algorithm = algorithm

    def authenticate(self, token: str | None) -> AuthenticatedUser:
        if not token:
            raise AuthenticationException("Missing bearer token")
        try:
            payload = verify_token(token, self._secret_key, self._algorithm)
        except ValueError as e:
            logger.info("Rejected bearer token: %s", e)
            raise AuthenticationException("Invalid or expired token") from e
        return AuthenticatedUser(user_id=str(payload["sub"]), claims=payload)


class FixedIdentityAuthenticator:
    """Resolves every request to one configured user (local development, tests)."""

    def __init__(self, user_id: str) -> None:
        if not user_id:
            raise ValueError("FixedIdentityAuthenticator requires a user id")
        self.user_id = user_id

    def authenticate(self, token: str | None) -> AuthenticatedUser:
        return AuthenticatedUser(user_id=self.user_id)


def build_authenticator(settings: "Settings") -> IAuthenticator:
    """Return the authenticator for settings.auth_mode ('jwt' or 'fixed')."""
    if settings.auth_mode == "fixed":
        logger.warning(
            "AUTH_MODE=fixed: every request is authenticated as %s",
            settings.fixed_identity_user_id,
        )
        return FixedIdentityAuthenticator(settings.fixed_identity_user_id)
    return JwtAuthenticator(
        settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )
