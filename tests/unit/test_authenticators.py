"""JwtAuthenticator, FixedIdentityAuthenticator and build_authenticator."""

from datetime import timedelta

import pytest

from offering_docs.core.config import get_settings
from offering_docs.domain.exceptions import AuthenticationException
from offering_docs.infrastructure.security import (
    FixedIdentityAuthenticator,
    JwtAuthenticator,
    build_authenticator,
    create_access_token,
)

SECRET = "unit-test-secret"


def test_valid_token() -> None:
    token = create_access_token({"sub": "user-1", "org": "o"}, SECRET)
    user = JwtAuthenticator(SECRET).authenticate(token)
    assert user.user_id == "user-1"
    assert user.claims["org"] == "o"


def test_missing_token() -> None:
    with pytest.raises(AuthenticationException, match="Missing"):
        JwtAuthenticator(SECRET).authenticate(None)


def test_wrong_secret() -> None:
    token = create_access_token({"sub": "user-1"}, "other-secret")
    with pytest.raises(AuthenticationException):
        JwtAuthenticator(SECRET).authenticate(token)


def test_expired_token() -> None:
    token = create_access_token({"sub": "user-1"}, SECRET, expires_delta=timedelta(seconds=-10))
    with pytest.raises(AuthenticationException):
        JwtAuthenticator(SECRET).authenticate(token)


def test_token_without_sub() -> None:
    token = create_access_token({"role": "x"}, SECRET)
    with pytest.raises(AuthenticationException):
        JwtAuthenticator(SECRET).authenticate(token)


def test_jwt_authenticator_requires_secret() -> None:
    with pytest.raises(ValueError):
        JwtAuthenticator("")


def test_fixed_identity_ignores_token() -> None:
    auth = FixedIdentityAuthenticator("dev-user")
    assert auth.authenticate(None).user_id == "dev-user"
    assert auth.authenticate("garbage").user_id == "dev-user"


def test_build_authenticator_selects_by_mode() -> None:
    settings = get_settings()
    assert isinstance(build_authenticator(settings), JwtAuthenticator)
    fixed = settings.model_copy(update={"auth_mode": "fixed", "fixed_identity_user_id": "dev-user"})
    assert isinstance(build_authenticator(fixed), FixedIdentityAuthenticator)
