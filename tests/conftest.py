# tests/conftest.py

"""Shared fixtures

The fake daemon is an httpx.MockTransport that records every request it
receives and answers with a JSON-RPC success envelope.
"""

import json
from typing import Any, Dict, List

import httpx
import pytest

from electrum_jsonrpc.core.config import Settings
from electrum_jsonrpc.services.electrum_client import ElectrumClient

DAEMON_ADDRESS = "http://127.0.0.1:7000"
LOGIN = "test"
PASSWORD = "test"


class FakeDaemon:
    """Records requests and answers every one with HTTP 200"""

    def __init__(self):
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        envelope = json.loads(request.content)
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": envelope["id"], "result": True}
        )

    @property
    def last_envelope(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture(scope="session")
def settings() -> Settings:
    """Daemon settings from the environment, built once per test session"""
    return Settings(_env_file=None)


@pytest.fixture
def daemon():
    return FakeDaemon()


@pytest.fixture
def http_client(daemon):
    return httpx.AsyncClient(transport=httpx.MockTransport(daemon))


@pytest.fixture
def electrum(http_client):
    """ElectrumClient talking to the fake daemon"""
    return ElectrumClient(LOGIN, PASSWORD, DAEMON_ADDRESS, http_client=http_client)
