"""Record tools exposed over MCP and the dispatcher that executes them."""

from .dispatcher import ToolDispatcher, ToolResponse, ToolSpec

__all__ = ["ToolDispatcher", "ToolResponse", "ToolSpec"]
