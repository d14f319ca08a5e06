"""Shared test fixtures for the Watana test suite."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest
from keyring.errors import KeyringError, PasswordDeleteError

from watana.client import WatanaClient
from watana.config.options import make_client_config

TEST_URL = "https://watana.test/api"
TEST_TOKEN = "tok-123"


class FakeKeyring:
    """In-memory keyring stand-in for the ``keyring`` module."""

    def __init__(self, broken: bool = False):
        self._store: dict[tuple[str, str], str] = {}
        self.broken = broken

    def get_keyring(self):
        return self

    def get_password(self, service: str, username: str) -> str | None:
        if self.broken:
            raise KeyringError("locked")
        return self._store.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        if self.broken:
            raise KeyringError("locked")
        self._store[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        if self.broken:
            raise KeyringError("locked")
        if (service, username) not in self._store:
            raise PasswordDeleteError("not found")
        del self._store[(service, username)]


class Recorder:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | Exception):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        # Fresh copy per call; one Response object cannot serve two requests
        return httpx.Response(
            self.response.status_code,
            headers=self.response.headers,
            content=self.response.content,
        )

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def json_response(data: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


@pytest.fixture
def client_config():
    return make_client_config(TEST_URL, TEST_TOKEN, 30)


@pytest.fixture
def make_client(client_config):
    """Build a client whose HTTP traffic goes to a :class:`Recorder`."""

    def _make(response: httpx.Response | Exception) -> tuple[WatanaClient, Recorder]:
        recorder = Recorder(response)
        client = WatanaClient(client_config, http_transport=httpx.MockTransport(recorder))
        return client, recorder

    return _make


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("WATANA_URL", "WATANA_TOKEN", "WATANA_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_dir(tmp_path, clean_env):
    """Redirect config to a temp directory and replace the real keyring.

    The fake keyring keeps tests from touching the system keychain.
    """
    config_file = tmp_path / "config.json"
    fake = FakeKeyring()
    with (
        patch("watana.config._storage.CONFIG_DIR", tmp_path),
        patch("watana.config._storage.CONFIG_FILE", config_file),
        patch("watana.config.credentials.CONFIG_FILE", config_file),
        patch("watana.config.credentials.keyring", fake),
    ):
        yield config_file, fake
