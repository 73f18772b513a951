"""Shared fixtures for the Conduit test suite."""

from collections.abc import Callable

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from conduit.app import create_app
from conduit.settings import Settings


def build_request(
    method: str = "GET",
    path: str = "/",
    headers: dict[str, str] | None = None,
    query_string: str = "",
    body: bytes = b"",
) -> Request:
    """Build a Starlette request without a running server."""
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": query_string.encode(),
        "headers": [(name.lower().encode(), value.encode()) for name, value in (headers or {}).items()],
        "server": ("testserver", 80),
        "client": ("testclient", 50000),
    }

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    return build_request


@pytest.fixture
def memory_settings(tmp_path) -> Settings:
    """Settings using in-memory backends and a throwaway data directory."""
    return Settings(_env_file=None, event_writer="memory", user_store="memory", data_dir=tmp_path, log_level="DEBUG")


@pytest.fixture
def client(memory_settings: Settings):
    app = create_app(memory_settings)
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
