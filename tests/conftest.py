import json
from typing import Any, Union

import httpx
import pytest
from click.testing import CliRunner

from credkit import config
from credkit.cli import ck

API_URL = "https://secrets.example.test:8844"
TIMESTAMP = "2016-01-01T12:00:00Z"


def password_body(name: str, value: str) -> dict[str, Any]:
    return {"id": "5a2edd4f", "type": "password", "name": name, "value": value, "updated_at": TIMESTAMP}


def key_pair_body(name: str, secret_type: str, public_key: str, private_key: str) -> dict[str, Any]:
    return {
        "id": "5a2edd4f",
        "type": secret_type,
        "name": name,
        "public_key": public_key,
        "private_key": private_key,
        "updated_at": TIMESTAMP,
    }


def certificate_body(name: str, ca: str, certificate: str, private_key: str) -> dict[str, Any]:
    return {
        "id": "5a2edd4f",
        "type": "certificate",
        "name": name,
        "ca": ca,
        "certificate": certificate,
        "private_key": private_key,
        "updated_at": TIMESTAMP,
    }


class FakeServer:
    """Queue of canned responses served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[Union[httpx.Response, Exception]] = []

    def respond(self, status_code: int, body: Union[dict, str]) -> None:
        if isinstance(body, dict):
            self._responses.append(httpx.Response(status_code, json=body))
        else:
            self._responses.append(httpx.Response(status_code, content=body.encode()))

    def fail(self, error: Exception) -> None:
        self._responses.append(error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        assert self._responses, f"unexpected request: {request.method} {request.url}"
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def sent_json(self, index: int = -1) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real config and credentials out of every test."""
    monkeypatch.setattr(config, "DEFAULT_CONFIG_FILE", tmp_path / "config.yaml")
    monkeypatch.delenv("CREDKIT_CONFIG", raising=False)
    monkeypatch.setenv("CREDKIT_API_URL", API_URL)
    monkeypatch.delenv("CREDKIT_ACCESS_TOKEN", raising=False)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def run(server):
    def invoke(*args: str):
        return CliRunner().invoke(ck, list(args), obj={"transport": server.transport})

    return invoke
