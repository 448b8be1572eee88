"""Test configuration and fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from drive_redirector.config import RedirectorConfig
from drive_redirector.server.app import create_app
from drive_redirector.server.config import ServerSettings


class MemoryEnvironment:
    """In-memory stand-in for the process environment."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


@pytest.fixture
def redirector_config() -> RedirectorConfig:
    """Provide a test boot configuration."""
    return RedirectorConfig(file_id="xyz", username="admin", password="secret")


@pytest.fixture
def memory_env() -> MemoryEnvironment:
    return MemoryEnvironment({"FILE_ID": "xyz"})


@pytest.fixture
def server_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> ServerSettings:
    """Provide default server settings isolated from any local `.env`."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "REDIRECTOR_HOST",
        "REDIRECTOR_PORT",
        "REDIRECTOR_LOG_LEVEL_INTERVAL_SECONDS",
        "REDIRECTOR_URL_TEMPLATE",
    ):
        monkeypatch.delenv(name, raising=False)
    return ServerSettings()


@pytest.fixture
def client(
    redirector_config: RedirectorConfig,
    server_settings: ServerSettings,
    memory_env: MemoryEnvironment,
) -> TestClient:
    app = create_app(redirector_config, server_settings, environment=memory_env)
    return TestClient(app)
