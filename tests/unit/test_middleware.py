"""Raw ASGI middleware: request id, size limit, timeout, security headers."""

import asyncio

from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from offering_docs.middleware import (
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from offering_docs.shared.telemetry import request_id_var


def _app() -> FastAPI:
    app = FastAPI()

    @app.get("/echo-id")
    async def echo_id(request: Request) -> dict:
        return {"state": request.state.request_id, "context": request_id_var.get()}

    @app.post("/body")
    async def body(request: Request) -> dict:
        return {"size": len(await request.body())}

    @app.post("/big/upload")
    async def big(request: Request) -> dict:
        return {"size": len(await request.body())}

    @app.get("/slow")
    async def slow() -> dict:
        await asyncio.sleep(5)
        return {}

    @app.get("/plain")
    async def plain() -> dict:
        return {}

    @app.get("/frame/x")
    async def frameable() -> dict:
        return {}

    return app


async def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def test_request_id_generated_and_forwarded() -> None:
    app = _app()
    app.add_middleware(RequestIDMiddleware)
    async with await _client(app) as client:
        generated = await client.get("/echo-id")
        forwarded = await client.get("/echo-id", headers={"X-Request-ID": "abc-123"})
        unsafe = await client.get("/echo-id", headers={"X-Request-ID": "bad id!"})

    assert generated.headers["x-request-id"] == generated.json()["state"]
    assert generated.json()["context"] == generated.json()["state"]
    assert forwarded.headers["x-request-id"] == "abc-123"
    assert unsafe.headers["x-request-id"] != "bad id!"


async def test_size_limit_per_path() -> None:
    app = _app()
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=10, path_limits={"/big": 100})
    async with await _client(app) as client:
        small = await client.post("/body", content=b"x" * 10)
        too_big = await client.post("/body", content=b"x" * 11)
        big_ok = await client.post("/big/upload", content=b"x" * 100)

    assert small.status_code == 200
    assert too_big.status_code == 413
    assert too_big.json()["error"] == "PAYLOAD_TOO_LARGE"
    assert big_ok.json() == {"size": 100}


async def test_timeout_returns_504() -> None:
    app = _app()
    app.add_middleware(TimeoutMiddleware, timeout_seconds=0.05)
    async with await _client(app) as client:
        response = await client.get("/slow")
    assert response.status_code == 504
    assert response.json()["error"] == "GATEWAY_TIMEOUT"


async def test_security_headers_and_frameable_prefix() -> None:
    app = _app()
    app.add_middleware(SecurityHeadersMiddleware, frameable_prefixes=("/frame",))
    async with await _client(app) as client:
        normal = await client.get("/plain")
        framed = await client.get("/frame/x")
    assert normal.headers["x-frame-options"] == "DENY"
    assert normal.headers["x-content-type-options"] == "nosniff"
    assert "x-frame-options" not in framed.headers
    assert framed.headers["x-content-type-options"] == "nosniff"
