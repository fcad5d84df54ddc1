from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
import httpx
from typing import Any, AsyncIterator, Dict, List, Optional

import openrouter_nodes.plugins  # noqa: F401  registers the built-in nodes
from openrouter_nodes.config import Settings, get_settings
from openrouter_nodes.registry import list_nodes, get_node
from openrouter_nodes.errors import ExecutionError, NodeOperationError
from openrouter_nodes.runtime import Context, load_options, run_node


router = APIRouter(prefix="/api/nodes")


def settings_dep() -> Settings:
    return get_settings()


async def http_client(settings: Settings = Depends(settings_dep)) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.request_timeout) as http:
        yield http


def env_cred_resolver(settings: Settings):
    async def _resolve(provider: Optional[str], credential_id: Optional[str]):
        if (provider or "").lower() == "openrouter" and settings.openrouter_api_key:
            return {"apiKey": settings.openrouter_api_key}
        return {}

    return _resolve


class OptionsIn(BaseModel):
    version: Optional[str] = None
    parameters: Dict[str, Any] = {}


class RunIn(BaseModel):
    name: str
    version: Optional[str] = None
    parameters: Dict[str, Any] = {}
    items: List[Dict[str, Any]] = [{"json": {}}]
    item_parameters: List[Dict[str, Any]] = []
    continue_on_fail: bool = False


def _spec_or_404(name: str, version: Optional[str]):
    spec = get_node(name, version)
    if not spec:
        raise HTTPException(404, f"node {name} not found")
    return spec


@router.get("")
def api_list_nodes(category: Optional[str] = None):
    return list_nodes(category)


@router.get("/{name}")
def api_get_node(name: str, version: Optional[str] = None):
    return _spec_or_404(name, version).model_dump()


@router.post("/{name}/options/{method}")
async def api_load_options(
    name: str,
    method: str,
    body: OptionsIn,
    http: httpx.AsyncClient = Depends(http_client),
    settings: Settings = Depends(settings_dep),
):
    spec = _spec_or_404(name, body.version)
    ctx = Context(
        http=http,
        logger=None,
        cred_resolver=env_cred_resolver(settings),
        spec=spec,
        parameters=body.parameters,
        settings=settings,
    )
    try:
        return await load_options(spec, method, ctx)
    except ExecutionError as e:
        raise HTTPException(404, str(e))
    except NodeOperationError as e:
        raise HTTPException(400, e.message)


@router.post("/run")
async def api_run_node(
    body: RunIn,
    http: httpx.AsyncClient = Depends(http_client),
    settings: Settings = Depends(settings_dep),
):
    spec = _spec_or_404(body.name, body.version)
    ctx = Context(
        http=http,
        logger=None,
        cred_resolver=env_cred_resolver(settings),
        spec=spec,
        parameters=body.parameters,
        items=body.items,
        item_parameters=body.item_parameters,
        continue_on_fail=body.continue_on_fail,
        settings=settings,
    )
    try:
        out = await run_node(spec, ctx)
    except ExecutionError as e:
        raise HTTPException(404, str(e))
    except NodeOperationError as e:
        detail = {"message": e.message, "node": e.node, "item": e.item_index}
        raise HTTPException(400, detail)
    return {"outputs": out}
