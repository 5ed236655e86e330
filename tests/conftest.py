"""Shared fixtures: a fake GlitchTip server behind httpx.MockTransport."""

from typing import Any, Optional

import httpx
import pytest
from fastmcp import Client

from glitchtip.config import Settings
from tools.mcp_server import create_server

BASE_URL = "http://glitchtip.test"
TOKEN = "test-token"


class FakeGlitchTip:
    """Routes requests by (method, path?query) and records every request."""

    def __init__(self):
        self.routes: dict[tuple[str, str], httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        status: int = 200,
        text: Optional[str] = None,
    ) -> None:
        if text is not None:
            response = httpx.Response(status, text=text)
        else:
            response = httpx.Response(status, json=json)
        self.routes[(method, f"/api/0{path}")] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.raw_path.decode())
        if key in self.routes:
            return self.routes[key]
        return httpx.Response(404, text='{"detail":"Not found."}')

    @property
    def paths(self) -> list[str]:
        return [r.url.raw_path.decode() for r in self.requests]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings():
    return Settings(base_url=BASE_URL, token=TOKEN)


@pytest.fixture
def fake():
    return FakeGlitchTip()


@pytest.fixture
def server(settings, fake):
    return create_server(settings, transport=fake.transport)


@pytest.fixture
def call_tool(server):
    """Call a tool through a real MCP client and return the raw result."""

    async def _call(name: str, arguments: Optional[dict] = None):
        async with Client(server) as client:
            return await client.call_tool_mcp(name, arguments or {})

    return _call
