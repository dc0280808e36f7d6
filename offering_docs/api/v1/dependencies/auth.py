"""Authentication dependencies (composition root).

The authenticator is chosen once in create_app() and stored on app.state;
routes only see the resolved AuthenticatedUser.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from offering_docs.application.interfaces.services import (
    AuthenticatedUser,
    IAuthenticator,
)

_http_bearer = HTTPBearer(auto_error=False)


def get_authenticator(request: Request) -> IAuthenticator:
    """Authenticator configured for this app instance."""
    return request.app.state.authenticator


async def get_current_user(
    authenticator: Annotated[IAuthenticator, Depends(get_authenticator)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_http_bearer)
    ] = None,
) -> AuthenticatedUser:
    """Resolve the bearer token to a user (401 AUTHENTICATION_ERROR when missing or invalid)."""
    token = credentials.credentials if credentials else None
    return authenticator.authenticate(token)


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
