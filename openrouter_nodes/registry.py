from typing import Dict, List, Optional, Tuple, Union

from .schema import NodeSpec

# In-process registry; node descriptions are static for the process lifetime
_NODES: Dict[Tuple[str, str], NodeSpec] = {}


def _version_key(version: str):
    return tuple(int(p) if p.isdigit() else p for p in version.split("."))


def register_node(spec: Union[NodeSpec, dict]) -> NodeSpec:
    if not isinstance(spec, NodeSpec):
        spec = NodeSpec(**spec)
    _NODES[(spec.name, spec.version)] = spec
    return spec


def install_nodes(specs: List[Union[NodeSpec, dict]]) -> List[NodeSpec]:
    return [register_node(d) for d in specs]


def _required_keys(spec: NodeSpec) -> List[str]:
    out: List[str] = []
    provider = (spec.auth.provider or "").lower()
    if "openrouter" in provider:
        out.append("OPENROUTER_API_KEY")
    return out


def list_nodes(category: Optional[str] = None) -> List[dict]:
    out: List[dict] = []
    for spec in _NODES.values():
        if category and spec.category != category:
            continue
        d = {"name": spec.name, "version": spec.version, "title": spec.title, "category": spec.category}
        doc = spec.doc
        if not doc and spec.properties:
            # Compose a short description from the declared properties
            doc = "Inputs: " + ", ".join(p.name for p in spec.properties[:4])
        if doc:
            d["doc"] = doc
        req_keys = _required_keys(spec)
        if req_keys:
            d["required_keys"] = req_keys
        out.append(d)
    return out


def get_node(name: str, version: Optional[str] = None) -> Optional[NodeSpec]:
    if version:
        return _NODES.get((name, version))
    candidates = [spec for (n, _), spec in _NODES.items() if n == name]
    if not candidates:
        return None
    return max(candidates, key=lambda s: _version_key(s.version))


def clear() -> None:
    _NODES.clear()
