"""Tests for the generic error responder."""
import json
from collections.abc import AsyncGenerator

import pytest
from conftest import API_TOKEN
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from api.dependencies import get_bookmark_store
from api.errors import http_exception_handler

SERVER_ERROR_BODY = {"error": {"message": "server error"}}


class _BrokenStore:
    """Store double whose every call fails the way a lost connection would."""

    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def list_all(self) -> list:
        raise self.exc

    async def insert(self, data: object) -> None:  # noqa: ARG002
        raise self.exc


@pytest.fixture
async def lenient_client(app_with_db: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client that returns 500 responses instead of re-raising app errors."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_db, raise_app_exceptions=False),
        base_url="http://test",
        headers={"Authorization": f"Bearer {API_TOKEN}"},
    ) as ac:
        yield ac


async def test__store_error__returns_opaque_500(
    app_with_db: FastAPI,
    lenient_client: AsyncClient,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Database failures become a generic 500 and the cause is only logged."""
    exc = OperationalError("SELECT secret_column", {}, Exception("connection refused"))
    app_with_db.dependency_overrides[get_bookmark_store] = lambda: _BrokenStore(exc)

    with caplog.at_level("ERROR", logger="api.errors"):
        response = await lenient_client.get("/api/bookmarks")

    assert response.status_code == 500
    assert response.json() == SERVER_ERROR_BODY
    assert "secret_column" not in response.text
    assert "connection refused" in caplog.text


async def test__store_error_on_create__returns_500(
    app_with_db: FastAPI,
    lenient_client: AsyncClient,
) -> None:
    """Failures after validation still reach the generic responder."""
    exc = OperationalError("INSERT", {}, Exception("disk full"))
    app_with_db.dependency_overrides[get_bookmark_store] = lambda: _BrokenStore(exc)

    response = await lenient_client.post(
        "/api/bookmarks",
        json={
            "title": "t",
            "url": "https://example.com",
            "description": "d",
            "rating": 3,
        },
    )
    assert response.status_code == 500
    assert response.json() == SERVER_ERROR_BODY


async def test__unexpected_error__returns_opaque_500(
    app_with_db: FastAPI,
    lenient_client: AsyncClient,
) -> None:
    """Non-database crashes are hidden behind the same body."""
    app_with_db.dependency_overrides[get_bookmark_store] = (
        lambda: _BrokenStore(RuntimeError("internal detail"))
    )

    response = await lenient_client.get("/api/bookmarks")
    assert response.status_code == 500
    assert response.json() == SERVER_ERROR_BODY
    assert "internal detail" not in response.text


async def test__framework_http_error__uses_api_error_shape() -> None:
    """HTTP errors raised by the framework render like API errors."""
    request = Request({"type": "http", "method": "GET", "path": "/x", "headers": []})
    exc = StarletteHTTPException(status_code=405, detail="Method Not Allowed",
                                 headers={"Allow": "GET"})

    response = await http_exception_handler(request, exc)

    assert response.status_code == 405
    assert json.loads(response.body) == {"error": {"message": "Method Not Allowed"}}
    assert response.headers["Allow"] == "GET"
