"""Tests for FastAPI error handlers."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from granter.exceptions import ForbiddenError, PermissionError, UnauthorizedError
from granter.integrations.fastapi._errors import install_error_handlers


@pytest.fixture()
def app() -> FastAPI:
    """Create a minimal FastAPI app with error handlers installed."""
    app = FastAPI()
    install_error_handlers(app)

    @app.get("/forbidden")
    async def trigger_forbidden() -> None:
        raise ForbiddenError("Permission denied: isAdmin", permission="isAdmin")

    @app.get("/unauthorized")
    async def trigger_unauthorized() -> None:
        raise UnauthorizedError()

    @app.get("/base")
    async def trigger_base() -> None:
        raise PermissionError("Nope")

    @app.get("/other")
    async def trigger_other() -> None:
        raise ValueError("not a permission error")

    return app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


class TestForbiddenHandler:
    def test_returns_403(self, client: TestClient) -> None:
        response = client.get("/forbidden")
        assert response.status_code == 403

    def test_response_is_json(self, client: TestClient) -> None:
        response = client.get("/forbidden")
        assert response.headers["content-type"] == "application/json"

    def test_response_has_detail(self, client: TestClient) -> None:
        response = client.get("/forbidden")
        assert response.json() == {"detail": "Permission denied: isAdmin"}


class TestUnauthorizedHandler:
    def test_returns_401(self, client: TestClient) -> None:
        response = client.get("/unauthorized")
        assert response.status_code == 401

    def test_response_has_detail(self, client: TestClient) -> None:
        response = client.get("/unauthorized")
        assert response.json() == {"detail": "Authentication required"}


class TestBaseHandler:
    def test_plain_permission_error_is_403(self, client: TestClient) -> None:
        response = client.get("/base")
        assert response.status_code == 403
        assert response.json() == {"detail": "Nope"}

    def test_other_exceptions_untouched(self, client: TestClient) -> None:
        response = client.get("/other")
        assert response.status_code == 500
