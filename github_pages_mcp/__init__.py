"""MCP server for managing GitHub Pages sites."""

__version__ = "1.0.0"
