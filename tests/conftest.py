from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from ujeebu_mcp.config import settings
from ujeebu_mcp.context import ExecutionContext, ServerContext
from ujeebu_mcp.dispatcher import NODE_PROPERTIES
from ujeebu_mcp.types import ApiCredentials

API_KEY = "test-api-key"
BASE_URL = "https://api.ujeebu.test"


class FakeUjeebuApi:
    """Records every request and answers with `handler` (200 + {} by default)."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture
def api() -> FakeUjeebuApi:
    return FakeUjeebuApi()


@pytest.fixture
def make_ctx(api: FakeUjeebuApi) -> Callable[..., ExecutionContext]:
    def factory(
        parameters: Optional[dict[str, Any]] = None,
        items: Optional[list[dict[str, Any]]] = None,
        continue_on_fail: bool = False,
        credentials: Optional[ApiCredentials] = ApiCredentials(api_key=API_KEY, base_url=BASE_URL),
    ) -> ExecutionContext:
        return ExecutionContext(
            http_client=api.client(),
            credentials=credentials,
            parameters=parameters,
            items=items,
            properties=NODE_PROPERTIES,
            continue_on_fail=continue_on_fail,
        )

    return factory


@pytest.fixture
def server_api(api: FakeUjeebuApi, monkeypatch: pytest.MonkeyPatch):
    """Point ServerContext (used by MCP tools) at the fake API."""
    monkeypatch.setattr(settings, "UJEEBU_API_KEY", API_KEY)
    monkeypatch.setattr(settings, "UJEEBU_BASE_URL", BASE_URL + "/")
    monkeypatch.setattr(settings, "UJEEBU_CONTINUE_ON_FAIL", False)
    ServerContext.set_client(api.client())
    yield api
    ServerContext.set_client(None)
