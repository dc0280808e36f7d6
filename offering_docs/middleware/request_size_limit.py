"""Request body size limit middleware.

JSON endpoints accept small bodies only; paths listed in path_limits (the
local blob upload route) get their own ceiling, normally the document size
limit. Enforced for both Content-Length and chunked bodies.
"""

from typing import Callable, Mapping

from offering_docs.middleware.asgi import get_header, send_error


async def _send_413(send: Callable, max_bytes: int, actual: int) -> None:
    await send_error(
        send,
        413,
        "PAYLOAD_TOO_LARGE",
        f"Request body must be at most {max_bytes} bytes",
        {"max_bytes": max_bytes, "content_length": actual},
    )


def _limit_for(path: str, default: int, path_limits: Mapping[str, int]) -> int:
    for prefix, limit in path_limits.items():
        if path.startswith(prefix):
            return limit
    return default


def RequestSizeLimitMiddleware(
    app: Callable,
    max_bytes: int,
    path_limits: Mapping[str, int] | None = None,
) -> Callable:
    """Reject requests whose body exceeds the limit for their path. Raw ASGI."""
    overrides = dict(path_limits or {})

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        limit = _limit_for(scope.get("path", ""), max_bytes, overrides)

        content_length = get_header(scope, "content-length")
        if content_length is not None:
            try:
                length = int(content_length)
            except ValueError:
                length = 0
            if length > limit:
                await _send_413(send, limit, length)
                return
            await app(scope, receive, send)
            return

        # No Content-Length: count streamed chunks and abort past the limit.
        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            total += len(body)
            if total > limit:
                await _send_413(send, limit, total)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        replayed = False

        async def replay() -> dict:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": b"".join(chunks), "more_body": False}
            return await receive()

        await app(scope, replay, send)

    return asgi_app
