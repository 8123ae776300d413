"""Pytest configuration and fixtures."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from rollbar_mcp.config import RollbarSettings
from rollbar_mcp.mcp.handlers import ToolDispatcher
from rollbar_mcp.mcp.server import build_dispatcher

API_PREFIX = "/api/1"

Route = httpx.Response | Callable[[httpx.Request], httpx.Response]


class FakeRollbarAPI:
    """In-memory stand-in for the Rollbar API, served through httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Route] = {}

    def add(self, path: str, json: Any = None, status: int = 200) -> None:
        self.routes[path] = httpx.Response(status, json=json)

    def add_handler(self, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json={"err": 1, "message": f"No route for {path}"})
        if callable(route):
            return route(request)
        return route

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    @property
    def paths(self) -> list[str]:
        return [r.url.path.removeprefix(API_PREFIX) for r in self.requests]

    def query(self, index: int = -1) -> dict[str, str]:
        return dict(self.requests[index].url.params)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep real ROLLBAR_* variables and .env files out of tests."""
    for var in (
        "ROLLBAR_PROJECT_TOKEN",
        "ROLLBAR_ACCOUNT_TOKEN",
        "ROLLBAR_PROJECT_ID",
        "ROLLBAR_PROJECT_NAME",
        "ROLLBAR_API_BASE_URL",
        "ROLLBAR_REQUEST_TIMEOUT",
        "ROLLBAR_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def api() -> FakeRollbarAPI:
    return FakeRollbarAPI()


@pytest.fixture
def sample_projects() -> dict:
    """Sample GET /projects response."""
    return {
        "err": 0,
        "result": [
            {"id": 123, "name": "other-project", "status": "enabled", "account_id": 789},
            {"id": 456, "name": "test-project", "status": "enabled", "account_id": 789},
        ],
    }


@pytest.fixture
def sample_items() -> dict:
    """Sample GET /items response."""
    return {
        "err": 0,
        "result": {
            "items": [
                {"id": 1, "counter": 42, "title": "Error 1", "environment": "production", "level": "error"},
                {"id": 2, "counter": 43, "title": "Error 2", "environment": "staging", "level": "warning"},
            ],
            "page": 1,
            "total_count": 2,
        },
    }


def _settings(**overrides: Any) -> RollbarSettings:
    return RollbarSettings(_env_file=None, **overrides)


@pytest.fixture
def make_settings() -> Callable[..., RollbarSettings]:
    """Factory for settings that ignore .env files."""
    return _settings


@pytest.fixture
async def make_dispatcher(api: FakeRollbarAPI):
    """Factory building a dispatcher whose clients talk to the fake API."""
    opened = []

    def factory(**overrides: Any) -> ToolDispatcher:
        dispatcher, clients = build_dispatcher(_settings(**overrides), transport=api.transport)
        opened.append(clients)
        return dispatcher

    yield factory

    for clients in opened:
        await clients.aclose()
