"""Shared fixtures: a fake requests.Session standing in for the CFBD API."""

from typing import Any, Optional

import pytest
import requests
from fastapi.testclient import TestClient

from core.settings import Settings
from servers.cbb_mcp_server.cbb_api import CbbApiClient
from servers.cbb_mcp_server.server_http import createApp
from servers.cbb_mcp_server.tools import ToolRegistry


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status
        self.payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if self.text is not None:
            raise requests.JSONDecodeError("Expecting value", self.text, 0)
        return self.payload

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Records every GET/POST and answers with a canned response or exception."""

    def __init__(self, response: Any = None):
        self.response = response if response is not None else FakeResponse(200, [])
        self.calls: list[dict[str, Any]] = []
        self.headers: dict[str, str] = {}
        self.closed = False

    def _answer(self, call: dict[str, Any]):
        self.calls.append(call)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def get(self, url, params=None, headers=None, timeout=None):
        return self._answer({"method": "GET", "url": url, "params": params, "headers": headers, "timeout": timeout})

    def post(self, url, json=None, timeout=None):
        return self._answer({"method": "POST", "url": url, "json": json, "timeout": timeout})

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(cbbdApiKey="test-key", keepaliveSec=0)


@pytest.fixture
def makeClient():
    """
    Build a TestClient whose upstream answers with `payload`.
    Returns (client, fakeSession).
    """
    def _make(payload: Any = None, status: int = 200, response: Any = None, **overrides):
        cfg = Settings(**{"cbbdApiKey": "test-key", "keepaliveSec": 0, **overrides})
        session = FakeSession(response if response is not None else FakeResponse(status, payload))
        registry = ToolRegistry(CbbApiClient(cfg, session=session))
        return TestClient(createApp(cfg, registry)), session

    return _make


def rpc(method: str, params: Optional[dict] = None, id_: Any = 1) -> dict:
    body: dict[str, Any] = {"jsonrpc": "2.0", "id": id_, "method": method}
    if params is not None:
        body["params"] = params
    return body


def toolCall(name: str, **arguments) -> dict:
    return rpc("tools/call", {"name": name, "arguments": arguments})


def resultText(resp) -> str:
    return resp.json()["result"]["content"][0]["text"]
