from __future__ import annotations

import base64
import os

import pytest
from fastapi.testclient import TestClient

from drive_redirector.config import RedirectorConfig
from drive_redirector.server.app import create_app
from drive_redirector.server.config import ServerSettings

AUTH = ("admin", "secret")


class _ReadOnlyEnv:
    def set(self, key: str, value: str) -> None:
        raise OSError("environment is read-only")


def test_get_redirects_to_current_file(client: TestClient) -> None:
    resp = client.get("/", follow_redirects=False)

    assert resp.status_code == 308
    assert resp.headers["location"] == "https://drive.google.com/file/d/xyz/view"
    assert resp.headers["cache-control"] == "no-cache"


def test_put_repoints_redirect(client: TestClient, memory_env) -> None:
    resp = client.put("/xyz", json={"new_file_id": "new1"}, auth=AUTH)

    assert resp.status_code == 200
    assert resp.text == "https://drive.google.com/file/d/new1/view"
    assert resp.headers["content-type"].startswith("text/plain")
    assert memory_env.values["FILE_ID"] == "new1"

    follow = client.get("/", follow_redirects=False)
    assert follow.headers["location"] == "https://drive.google.com/file/d/new1/view"


def test_put_with_stale_id_is_bad_request(client: TestClient) -> None:
    resp = client.put("/abc", json={"new_file_id": "new1"}, auth=AUTH)

    assert resp.status_code == 400
    follow = client.get("/", follow_redirects=False)
    assert follow.headers["location"].endswith("/xyz/view")


@pytest.mark.parametrize("body", [{"new_file_id": ""}, {}])
def test_put_with_empty_new_id_is_bad_request(client: TestClient, body: dict) -> None:
    resp = client.put("/xyz", json=body, auth=AUTH)

    assert resp.status_code == 400


def test_put_with_invalid_body_is_bad_request(client: TestClient) -> None:
    resp = client.put("/xyz", json={"new_file_id": ["not", "a", "string"]}, auth=AUTH)

    assert resp.status_code == 400


def test_put_without_credentials_is_unauthorized(client: TestClient) -> None:
    resp = client.put("/xyz", json={"new_file_id": "new1"})

    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Basic"
    assert client.get("/", follow_redirects=False).headers["location"].endswith("/xyz/view")


@pytest.mark.parametrize("auth", [("admin", "wrong"), ("root", "secret"), ("ADMIN", "secret")])
def test_put_with_wrong_credentials_is_unauthorized(client: TestClient, auth) -> None:
    resp = client.put("/xyz", json={"new_file_id": "new1"}, auth=auth)

    assert resp.status_code == 401
    assert client.get("/", follow_redirects=False).headers["location"].endswith("/xyz/view")


def test_auth_is_checked_before_body(client: TestClient) -> None:
    resp = client.put("/xyz", json=["not", "an", "object"])

    assert resp.status_code == 401


def test_unparseable_body_without_credentials_is_unauthorized(client: TestClient) -> None:
    resp = client.put(
        "/xyz", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert resp.status_code == 401
    assert "json_invalid" not in resp.text


def test_unparseable_body_with_credentials_is_bad_request(client: TestClient) -> None:
    resp = client.put(
        "/xyz",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
        auth=AUTH,
    )

    assert resp.status_code == 400
    assert resp.json()["detail"][0]["type"] == "json_invalid"


def test_put_without_body_is_bad_request(client: TestClient) -> None:
    resp = client.put("/xyz", auth=AUTH)

    assert resp.status_code == 400
    assert client.get("/", follow_redirects=False).headers["location"].endswith("/xyz/view")


def test_malformed_authorization_header_is_unauthorized(client: TestClient) -> None:
    resp = client.put(
        "/xyz",
        json={"new_file_id": "new1"},
        headers={"Authorization": "Basic not-base64"},
    )

    assert resp.status_code == 401


def test_persistence_failure_returns_500_and_keeps_new_id(
    redirector_config: RedirectorConfig, server_settings: ServerSettings
) -> None:
    client = TestClient(create_app(redirector_config, server_settings, environment=_ReadOnlyEnv()))

    resp = client.put("/xyz", json={"new_file_id": "new1"}, auth=AUTH)

    assert resp.status_code == 500
    assert resp.json()["detail"] == "failed to set value at FILE_ID: environment is read-only"
    follow = client.get("/", follow_redirects=False)
    assert follow.headers["location"].endswith("/new1/view")


def test_custom_url_template(
    redirector_config: RedirectorConfig, monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("REDIRECTOR_URL_TEMPLATE", "https://files.example.com/{file_id}")
    client = TestClient(create_app(redirector_config, ServerSettings(), environment=_ReadOnlyEnv()))

    resp = client.get("/", follow_redirects=False)

    assert resp.headers["location"] == "https://files.example.com/xyz"


def test_create_app_loads_config_from_environment(
    server_settings: ServerSettings, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("FILE_ID", "env-file")
    monkeypatch.setenv("AUTH_USER", "admin")
    monkeypatch.setenv("AUTH_PASSWORD", base64.b64encode(b"secret").decode("ascii"))

    client = TestClient(create_app(settings=server_settings))

    resp = client.put("/env-file", json={"new_file_id": "next"}, auth=AUTH)

    assert resp.status_code == 200
    assert os.environ["FILE_ID"] == "next"
