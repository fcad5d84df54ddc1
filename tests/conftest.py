"""Shared fixtures: a fake OpenRouter API behind an httpx MockTransport."""

import json

import httpx
import pytest

from openrouter_nodes.config import Settings
from openrouter_nodes.plugins.openrouter import OPENROUTER_NODE
from openrouter_nodes.runtime import Context

API_KEY = "sk-or-test"


class FakeOpenRouter:
    """Records every request and replays queued chat responses in order.

    A queued entry may be a dict (JSON body), a str (event-stream body),
    an ``httpx.Response`` or an exception to raise from the transport.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.models = {"data": [{"id": "m1", "description": "d1"}]}
        self.chat: list = []

    def _reply(self, request, entry):
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, httpx.Response):
            return entry
        if isinstance(entry, str):
            return httpx.Response(200, text=entry, headers={"content-type": "text/event-stream"})
        return httpx.Response(200, json=entry)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/models"):
            return self._reply(request, self.models)
        if request.url.path.endswith("/chat/completions"):
            entry = self.chat.pop(0) if self.chat else {"id": "default", "choices": []}
            return self._reply(request, entry)
        return httpx.Response(404, json={"error": "not found"})

    def bodies(self):
        return [json.loads(r.content) for r in self.requests if r.content]


@pytest.fixture
def settings():
    return Settings(openrouter_api_key=API_KEY)


@pytest.fixture
def api():
    return FakeOpenRouter()


@pytest.fixture
def http(api):
    # MockTransport holds no connections, so the client needs no teardown
    return httpx.AsyncClient(transport=httpx.MockTransport(api.handler))


async def static_resolver(provider, credential_id):
    return {"apiKey": API_KEY}


@pytest.fixture
def make_ctx(http, settings):
    def _make(parameters=None, items=None, **kwargs):
        kwargs.setdefault("cred_resolver", static_resolver)
        return Context(
            http=http,
            logger=None,
            spec=OPENROUTER_NODE,
            parameters=parameters or {},
            items=items,
            settings=settings,
            **kwargs,
        )

    return _make


@pytest.fixture
def api_key():
    return API_KEY
