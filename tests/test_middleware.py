"""
Unit tests for middleware — RequestIDMiddleware and RequestTimingMiddleware.
"""

import uuid

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.logging import request_id_ctx
from app.middleware import (
    PROCESS_TIME_HEADER,
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    RequestTimingMiddleware,
)


def _make_test_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def test_endpoint():
        return {"ok": True, "request_id": request_id_ctx.get()}

    return app


@pytest.fixture()
def test_app():
    return _make_test_app()


async def _get(app, **kwargs):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get("/test", **kwargs)


class TestRequestIDMiddleware:
    @pytest.mark.asyncio
    async def test_generates_request_id_when_absent(self, test_app):
        resp = await _get(test_app)

        uuid.UUID(resp.headers[REQUEST_ID_HEADER])

    @pytest.mark.asyncio
    async def test_honours_existing_request_id(self, test_app):
        resp = await _get(test_app, headers={REQUEST_ID_HEADER: "trace-12345"})

        assert resp.headers[REQUEST_ID_HEADER] == "trace-12345"

    @pytest.mark.asyncio
    async def test_request_id_visible_to_handlers(self, test_app):
        resp = await _get(test_app, headers={REQUEST_ID_HEADER: "trace-abc"})

        assert resp.json()["request_id"] == "trace-abc"

    @pytest.mark.asyncio
    async def test_context_reset_after_request(self, test_app):
        await _get(test_app, headers={REQUEST_ID_HEADER: "trace-abc"})

        assert request_id_ctx.get() is None


class TestRequestTimingMiddleware:
    @pytest.mark.asyncio
    async def test_adds_process_time_header(self, test_app):
        resp = await _get(test_app)

        value = resp.headers[PROCESS_TIME_HEADER]
        assert value.endswith("ms")
        assert float(value[:-2]) >= 0
