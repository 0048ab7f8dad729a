from __future__ import annotations

import json as _json
from typing import Any, Optional

import pytest

from src.field_service.field_service.api.connection import ApiConfig, ApiConnection
from src.field_service.field_service.api.query_cache import QueryClient

BASE_URL = "http://backend.test"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, *, text: Optional[str] = None, reason: str = ""):
        self.status_code = status_code
        self._body = body
        if text is None:
            text = "" if body is None else _json.dumps(body)
        self.text = text
        self.content = text.encode("utf-8")
        self.reason = reason

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is not None:
            return self._body
        return _json.loads(self.text)


class FakeSession:
    """Stands in for ``requests.Session``; routes by (METHOD, path)."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict] = []

    def respond(self, method: str, path: str, body: Any = None, *, status: int = 200, text: Optional[str] = None) -> None:
        self.routes[(method.upper(), path)] = FakeResponse(status, body, text=text)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method.upper(), path)] = exc

    def request(self, method, url, headers=None, timeout=None, json=None, params=None):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        self.calls.append({"method": method, "path": path, "json": json, "params": params, "headers": headers})
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(404, {"message": f"No route for {method} {path}"})
        if isinstance(route, Exception):
            raise route
        return route

    def calls_to(self, method: str, path: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == method and c["path"] == path]


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def conn(fake_session) -> ApiConnection:
    return ApiConnection(ApiConfig(base_url=BASE_URL, token="t"), session=fake_session)


@pytest.fixture
def queries(conn) -> QueryClient:
    return QueryClient(conn, stale_seconds=300)


@pytest.fixture
def app(fake_session, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.field_service.field_service.container import build_container
    from src.field_service.field_service.main import create_app

    container = build_container(api_config={"base_url": BASE_URL, "token": "t"}, session=fake_session)
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def flashes(client):
    def _read() -> list[tuple[str, str]]:
        with client.session_transaction() as s:
            return list(s.get("_flashes", []))

    return _read
