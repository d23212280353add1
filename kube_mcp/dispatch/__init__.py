from .dispatcher import ToolDispatcher, ToolResponse

__all__ = ["ToolDispatcher", "ToolResponse"]
