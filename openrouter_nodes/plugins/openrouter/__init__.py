from .description import OPENROUTER_NODE

__all__ = ["OPENROUTER_NODE"]
