"""MCP tool surfaces."""

from .pages_tools import PagesTools, ToolResponse

__all__ = [
    'PagesTools',
    'ToolResponse',
]
