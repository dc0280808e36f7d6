"""JWT token creation and verification for authentication.

Secret and algorithm are passed in by the caller (JwtAuthenticator), so
verification does not depend on global settings.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from offering_docs.shared.utils.datetime import utc_now

DEFAULT_TOKEN_TTL = timedelta(hours=8)


def create_access_token(
    data: dict[str, Any],
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (must include sub).
        secret_key: Signing secret.
        algorithm: JWS algorithm.
        expires_delta: Optional TTL; defaults to 8 hours.

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    to_encode["exp"] = utc_now() + (expires_delta or DEFAULT_TOKEN_TTL)
    encoded = jwt.encode(to_encode, secret_key, algorithm=algorithm)
    return cast(str, encoded)


def verify_token(token: str, secret_key: str, algorithm: str = "HS256") -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
