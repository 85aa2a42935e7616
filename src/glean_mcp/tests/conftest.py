"""Shared fixtures: a recording stub in place of the Glean client."""

from __future__ import annotations

from typing import Any

import pytest

from glean_mcp.logger import configure_logging
from glean_mcp.registry import default_registry
from glean_mcp.server import ToolServer


class StubClient:
    """Records every call and returns canned responses (or raises a canned error)."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response if response is not None else {}
        self.error = error
        self.calls: list[tuple[str, Any]] = []

    async def _call(self, route: str, request: Any) -> Any:
        self.calls.append((route, request))
        if self.error is not None:
            raise self.error
        return self.response

    async def search(self, request: Any) -> Any:
        return await self._call("search", request)

    async def chat(self, request: Any) -> Any:
        return await self._call("chat", request)


@pytest.fixture(autouse=True)
def quiet_logs() -> None:
    configure_logging("none")


@pytest.fixture
def stub() -> StubClient:
    return StubClient()


@pytest.fixture
def server(stub: StubClient) -> ToolServer:
    return ToolServer(default_registry(lambda: stub))
