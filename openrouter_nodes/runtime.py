import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from .config import Settings, get_settings
from .errors import ExecutionError, NodeOperationError
from .exec_http import RequestOptions, send_request
from .exec_python import exec_python
from .schema import NodeSpec

CredResolver = Callable[[Optional[str], Optional[str]], Awaitable[Optional[Dict[str, Any]]]]

_MISSING = object()


def _resolve_path(path: str, data: Any) -> Any:
    current: Any = data
    for part in path.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        elif isinstance(current, (list, tuple)) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            raise KeyError(path)
    return current


class Context:
    """Capabilities the host hands to a node while it runs.

    Parameters are looked up per item: ``item_parameters[index]`` wins over
    ``parameters``, and a top-level property that is not configured at all
    falls back to the default declared in the node spec.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        logger: Optional[logging.Logger],
        cred_resolver: CredResolver,
        *,
        spec: Optional[NodeSpec] = None,
        parameters: Optional[Dict[str, Any]] = None,
        items: Optional[List[Dict[str, Any]]] = None,
        item_parameters: Optional[List[Dict[str, Any]]] = None,
        continue_on_fail: bool = False,
        settings: Optional[Settings] = None,
    ):
        self.http = http
        self.log = logger or logging.getLogger("openrouter_nodes")
        self.cred_resolver = cred_resolver
        self.spec = spec
        self.parameters = parameters or {}
        self.items = items if items is not None else [{"json": {}}]
        self.item_parameters = item_parameters or []
        self._continue_on_fail = continue_on_fail
        self.settings = settings or get_settings()

    @property
    def node_name(self) -> Optional[str]:
        return self.spec.title if self.spec else None

    def get_input_data(self) -> List[Dict[str, Any]]:
        return self.items

    def _configured(self, index: int) -> List[Dict[str, Any]]:
        sources = []
        if index < len(self.item_parameters) and self.item_parameters[index]:
            sources.append(self.item_parameters[index])
        sources.append(self.parameters)
        return sources

    def get_parameter(self, name: str, index: int = 0, default: Any = _MISSING) -> Any:
        head = name.split(".", 1)[0]
        for source in self._configured(index):
            if head in source:
                try:
                    return _resolve_path(name, source)
                except KeyError:
                    break
        else:
            if self.spec is not None:
                try:
                    return self.spec.default_for(name)
                except KeyError:
                    pass
        if default is not _MISSING:
            return default
        raise NodeOperationError(f'Could not get parameter "{name}"', node=self.node_name, item_index=index)

    async def get_credentials(self, name: str) -> Dict[str, Any]:
        provider = None
        if self.spec is not None:
            if name not in {c.name for c in self.spec.credentials}:
                raise NodeOperationError(f'Node does not have any credentials of type "{name}" set', node=self.node_name)
            provider = self.spec.auth.provider
        creds = await self.cred_resolver(provider, name)
        if not creds:
            raise NodeOperationError(f'No credentials got returned for "{name}"', node=self.node_name)
        return creds

    async def request(self, options: RequestOptions) -> Any:
        return await send_request(self.http, options)

    def continue_on_fail(self) -> bool:
        return self._continue_on_fail


async def run_node(spec: NodeSpec, ctx: Context) -> List[List[Dict[str, Any]]]:
    return await exec_python(spec.impl, ctx)


async def load_options(spec: NodeSpec, method: str, ctx: Context) -> List[Dict[str, Any]]:
    impl = spec.load_options.get(method)
    if impl is None:
        raise ExecutionError(f"Unknown load options method {method!r} for {spec.name}")
    return await exec_python(impl, ctx)
