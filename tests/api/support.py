# This file provides shared helpers for API endpoint tests.
# It exists so tests can override usecase dependencies without touching real databases.
# The helpers build consistent config objects and scoped TestClient contexts with a session cookie.
# Centralized test wiring keeps API tests small and focused on behavior.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.dependencies import (
    get_actor_usecase,
    get_config,
    get_database_client,
    get_film_usecase,
)

ADMIN_TOKEN = "token_admin"
READ_ONLY_TOKEN = "token_user"


def build_test_config() -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Film Library API",
        app_version="0.1.0",
        host="0.0.0.0",
        port=8080,
        environment="test",
        database_url="sqlite://",
        allowed_origins=[],
        session_cookie_name="session_id",
        session_tokens={ADMIN_TOKEN: "full", READ_ONLY_TOKEN: "read_only"},
        filmography_strategy="per_actor",
        enable_metrics=True,
    )


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables if existing_tables is not None else {"film", "actor", "film_actor"}

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    film_usecase: Any | None = None,
    actor_usecase: Any | None = None,
    session_token: str | None = ADMIN_TOKEN,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    app.dependency_overrides[get_database_client] = lambda: db_client or FakeDBClient()
    if film_usecase is not None:
        app.dependency_overrides[get_film_usecase] = lambda: film_usecase
    if actor_usecase is not None:
        app.dependency_overrides[get_actor_usecase] = lambda: actor_usecase

    cookies = {resolved_config.session_cookie_name: session_token} if session_token else None
    try:
        with TestClient(
            app, cookies=cookies, raise_server_exceptions=raise_server_exceptions
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
