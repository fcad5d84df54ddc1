"""
openrouter_nodes: an OpenRouter chat-completion node for workflow hosts.
"""

__version__ = "1.0.0"

from .errors import ExecutionError, NodeOperationError
from .runtime import Context, run_node, load_options
from .schema import NodeSpec

__all__ = [
    "Context",
    "ExecutionError",
    "NodeOperationError",
    "NodeSpec",
    "run_node",
    "load_options",
    "__version__",
]
