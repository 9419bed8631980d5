"""
Pytest fixtures for MCP Remote tests.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Add project root to path for package imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mcp_remote.configs import BridgeConfig  # noqa: E402
from mcp_remote.rpc import RemoteCaller  # noqa: E402

ENDPOINT = "https://remote.example.test/mcp"


class FakeRemote:
    """
    Scriptable remote endpoint for httpx.MockTransport.

    Register a reply per JSON-RPC method; every request body is recorded.
    A reply may be a dict (sent as a 200 JSON body), an httpx.Response,
    an exception instance (raised), or a callable taking the decoded body.
    """

    def __init__(self):
        self.replies: dict = {}
        self.requests: list[dict] = []
        self.raw_requests: list[httpx.Request] = []

    def on(self, method: str, reply) -> "FakeRemote":
        self.replies[method] = reply
        return self

    def result(self, method: str, result) -> "FakeRemote":
        return self.on(method, lambda body: {"jsonrpc": "2.0", "id": body["id"], "result": result})

    def error(self, method: str, code: int, message: str) -> "FakeRemote":
        return self.on(
            method,
            lambda body: {"jsonrpc": "2.0", "id": body["id"], "error": {"code": code, "message": message}},
        )

    def calls(self, method: str) -> list[dict]:
        return [body for body in self.requests if body["method"] == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        self.raw_requests.append(request)

        reply = self.replies.get(body["method"])
        if reply is None:
            return httpx.Response(404, text="not found")
        if callable(reply) and not isinstance(reply, type):
            reply = reply(body)
        if isinstance(reply, BaseException):
            if isinstance(reply, httpx.RequestError):
                reply.request = request
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def config() -> BridgeConfig:
    """Bridge config pointing at the fake endpoint."""
    return BridgeConfig(endpoint_url=ENDPOINT)


@pytest.fixture
def remote() -> FakeRemote:
    """Scriptable fake remote server."""
    return FakeRemote()


@pytest.fixture
def caller(config: BridgeConfig, remote: FakeRemote) -> RemoteCaller:
    """Remote caller wired to the fake remote."""
    return RemoteCaller(config, transport=remote.transport())


@pytest.fixture
def make_caller(remote: FakeRemote) -> Callable[[BridgeConfig], RemoteCaller]:
    """Build a caller for a custom config, still wired to the fake remote."""

    def _make(cfg: BridgeConfig) -> RemoteCaller:
        return RemoteCaller(cfg, transport=remote.transport())

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added by setup_logging so they never outlive a test."""
    yield
    logger = logging.getLogger("mcp_remote")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
