"""Tests for the /api/nodes router."""

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport

from hub.api_nodes import http_client, router, settings_dep
from openrouter_nodes import registry
from openrouter_nodes.config import Settings
from openrouter_nodes.plugins import register_builtin_nodes


@pytest_asyncio.fixture
async def client(api, settings):
    app = FastAPI()
    app.include_router(router)

    async def _mock_http():
        async with httpx.AsyncClient(transport=httpx.MockTransport(api.handler)) as http:
            yield http

    app.dependency_overrides[http_client] = _mock_http
    app.dependency_overrides[settings_dep] = lambda: settings
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
async def test_list_nodes(client):
    resp = await client.get("/api/nodes")
    assert resp.status_code == 200
    assert [n["name"] for n in resp.json()] == ["openrouter.chat"]


@pytest.mark.asyncio
async def test_get_node(client):
    resp = await client.get("/api/nodes/openrouter.chat")
    assert resp.status_code == 200
    body = resp.json()
    assert body["credentials"] == [{"name": "openRouterApi", "required": True}]
    assert body["properties"][0]["name"] == "operation"

    resp = await client.get("/api/nodes/missing.node")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_load_model_options(client, api, api_key):
    resp = await client.post("/api/nodes/openrouter.chat/options/getModels", json={})
    assert resp.status_code == 200
    assert resp.json() == [{"name": "m1", "value": "m1", "description": "d1"}]
    assert api.requests[0].headers["Authorization"] == f"Bearer {api_key}"


@pytest.mark.asyncio
async def test_load_model_options_failure(client, api):
    api.models = {"unexpected": True}
    resp = await client.post("/api/nodes/openrouter.chat/options/getModels", json={})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Failed to load models from OpenRouter API")


@pytest.mark.asyncio
async def test_unknown_options_method(client):
    resp = await client.post("/api/nodes/openrouter.chat/options/getVoices", json={})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_run_batch(client, api):
    api.chat.extend([{"id": "a"}, {"id": "b"}])
    resp = await client.post("/api/nodes/run", json={
        "name": "openrouter.chat",
        "parameters": {"model": "m1", "messages": {"messagesValues": [{"role": "user", "content": "hi"}]}},
        "items": [{"json": {}}, {"json": {}}],
    })
    assert resp.status_code == 200
    assert resp.json() == {"outputs": [[{"json": {"id": "a"}}, {"json": {"id": "b"}}]]}


@pytest.mark.asyncio
async def test_run_batch_abort(client, api):
    resp = await client.post("/api/nodes/run", json={
        "name": "openrouter.chat",
        "parameters": {"model": "m1", "messages": {"messagesValues": []}},
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == {"message": "At least one message is required", "node": "OpenRouter", "item": 0}
    assert api.requests == []


@pytest.mark.asyncio
async def test_run_unknown_node(client):
    resp = await client.post("/api/nodes/run", json={"name": "nope.node"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_run_batch_credential_failure_names_the_item(api):
    app = FastAPI()
    app.include_router(router)

    async def _mock_http():
        async with httpx.AsyncClient(transport=httpx.MockTransport(api.handler)) as http:
            yield http

    app.dependency_overrides[http_client] = _mock_http
    app.dependency_overrides[settings_dep] = lambda: Settings(openrouter_api_key=None)
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        resp = await c.post("/api/nodes/run", json={
            "name": "openrouter.chat",
            "parameters": {"model": "m1", "messages": {"messagesValues": [{"role": "user", "content": "hi"}]}},
        })
    assert resp.status_code == 400
    assert resp.json()["detail"] == {
        "message": 'No credentials got returned for "openRouterApi"', "node": "OpenRouter", "item": 0,
    }
    assert api.requests == []


@pytest.mark.asyncio
async def test_options_method_with_missing_function(client):
    broken = {"module": "openrouter_nodes.plugins.openrouter.list_models", "function": "get_voices"}
    registry.register_node({
        "name": "demo.broken",
        "title": "Broken",
        "category": "Utility",
        "load_options": {"getVoices": broken},
        "impl": broken,
    })
    try:
        resp = await client.post("/api/nodes/demo.broken/options/getVoices", json={})
    finally:
        registry.clear()
        register_builtin_nodes()
    assert resp.status_code == 404
    assert "get_voices" in resp.json()["detail"]
