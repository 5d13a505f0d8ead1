from __future__ import annotations
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from vaani.config import ProviderConfig, load_settings
from vaani.providers.types import ProviderResponse

BASE_ENV = {"TELEGRAM_BOT_TOKEN": "123:abc"}


class FakeProvider:
    """Stands in for an HTTPProvider; records every prompt it receives."""

    def __init__(self, name: str, replies: List[ProviderResponse | Exception]) -> None:
        self.config = ProviderConfig(name=name, family="chat", endpoint="http://fake", api_key="k", model=f"{name}-model")
        self.replies = list(replies)
        self.prompts: List[str] = []

    @property
    def name(self) -> str:
        return self.config.name

    async def chat(self, req):
        self.prompts.append(req.messages[-1]["content"])
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def ok(text: str) -> ProviderResponse:
    return ProviderResponse(True, text, 5, {})


def failed(error: str = "HTTP 503") -> ProviderResponse:
    return ProviderResponse(False, "", 5, {"status": 503}, error=error)


class Recorder:
    """httpx.MockTransport handler that answers by host and keeps the requests."""

    def __init__(self, routes: Dict[str, Callable[[httpx.Request], httpx.Response]]) -> None:
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.host)
        if handler is None:
            return httpx.Response(404, json={"error": "no route"})
        return handler(request)

    def to(self, host: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def make_settings():
    def _make(**env: str):
        return load_settings({**BASE_ENV, **env})
    return _make
