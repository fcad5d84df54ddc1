from openrouter_nodes.registry import install_nodes
from .openrouter import OPENROUTER_NODE

BUILTIN_NODES = [OPENROUTER_NODE]


def register_builtin_nodes():
    return install_nodes(BUILTIN_NODES)


register_builtin_nodes()
