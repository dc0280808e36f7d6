"""Request timeout middleware.

Cancels the request if it runs longer than the configured timeout (asyncio.wait_for).
Paths under exempt_prefixes (direct blob transfers) are not limited.
"""

import asyncio
import logging
from typing import Callable, Sequence

from offering_docs.middleware.asgi import send_error

logger = logging.getLogger(__name__)


def TimeoutMiddleware(
    app: Callable,
    timeout_seconds: int,
    exempt_prefixes: Sequence[str] = (),
) -> Callable:
    """Cancel request after timeout_seconds (sends 504 on timeout). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("path", "").startswith(tuple(exempt_prefixes)):
            await app(scope, receive, send)
            return
        started = False

        async def send_wrapper(message: dict) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await asyncio.wait_for(
                app(scope, receive, send_wrapper),
                timeout=float(timeout_seconds),
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out after %s seconds: %s %s",
                timeout_seconds,
                scope.get("method", ""),
                scope.get("path", ""),
            )
            if started:
                return
            await send_error(
                send,
                504,
                "GATEWAY_TIMEOUT",
                f"Request timed out after {timeout_seconds} seconds",
                {"timeout_seconds": timeout_seconds},
            )

    return asgi_app
