from typing import Optional


class ExecutionError(Exception):
    """Raised when a node description points at something the runtime cannot run"""


class NodeOperationError(Exception):
    """User-facing failure of a node operation"""

    def __init__(self, message: str, node: Optional[str] = None, item_index: Optional[int] = None):
        self.message = message
        self.node = node
        self.item_index = item_index
        super().__init__(message)
