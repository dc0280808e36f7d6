"""Security headers middleware.

Adds common security-related response headers. Responses under
frameable_prefixes (inline PDF views served from local storage) omit
X-Frame-Options and the restrictive CSP so browsers can embed them.
"""

from typing import Callable, Sequence

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
_FRAMING_HEADERS = frozenset({b"x-frame-options", b"content-security-policy"})


def SecurityHeadersMiddleware(
    app: Callable,
    headers: dict[str, str] | None = None,
    frameable_prefixes: Sequence[str] = (),
) -> Callable:
    """Set security headers on all responses without overriding ones already set. Raw ASGI."""
    resolved = headers if headers is not None else DEFAULT_HEADERS
    header_list = [(k.lower().encode(), v.encode()) for k, v in resolved.items()]
    frameable = tuple(frameable_prefixes)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        allow_framing = bool(frameable) and scope.get("path", "").startswith(frameable)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                for name_b, value_b in header_list:
                    if name_b in seen or (allow_framing and name_b in _FRAMING_HEADERS):
                        continue
                    headers.append((name_b, value_b))
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
