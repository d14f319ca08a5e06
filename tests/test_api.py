"""Tests for watana.api -- connect()."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from conftest import Recorder, json_response

import watana
from watana.api import connect
from watana.client import WatanaClient
from watana.config import save_server_config, save_token
from watana.errors import ConfigError


def test_connect_explicit(config_dir):
    client = connect("https://watana.test/api", "tok", 15)
    assert isinstance(client, WatanaClient)
    assert client.transport.config.url == "https://watana.test/api"
    assert client.transport.config.timeout == 15


def test_connect_from_saved_config(config_dir):
    save_server_config("https://saved.test/api", 40)
    save_token("https://saved.test/api", "saved-token")
    client = connect()
    assert client.transport.config.url == "https://saved.test/api"
    assert client.transport.config.token == "saved-token"
    assert client.transport.config.timeout == 40


def test_connect_explicit_overrides_saved(config_dir):
    save_server_config("https://saved.test/api", 40)
    client = connect(url="https://other.test/api", token="t")
    assert client.transport.config.url == "https://other.test/api"


def test_connect_without_config(config_dir):
    with pytest.raises(ConfigError):
        connect()


def test_connect_rejects_plain_http(config_dir):
    with pytest.raises(ConfigError, match="https"):
        connect("http://watana.test/api", "tok")


def test_connect_routes_through_http_transport(config_dir):
    recorder = Recorder(json_response({"success": True, "estado": "activo"}))
    client = connect(
        "https://watana.test/api", "tok", http_transport=httpx.MockTransport(recorder)
    )
    result = asyncio.run(client.get_folder("C-1"))
    assert result.status == "activo"
    assert recorder.requests[0].headers["authorization"] == "tok"


def test_package_exports():
    assert watana.connect is connect
    assert watana.WatanaClient is WatanaClient
    assert isinstance(watana.__version__, str)
    for name in watana.__all__:
        assert hasattr(watana, name)
