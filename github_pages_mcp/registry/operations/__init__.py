"""
Operation registrations for github-pages-mcp-server.

Registers the GitHub Pages operations with a registry.
"""

from ..operation_registry import OperationRegistry
from .pages_operations import PAGES_OPERATIONS, register_pages_operations


def create_pages_registry() -> OperationRegistry:
    """Build a registry holding the five GitHub Pages operations."""
    registry = OperationRegistry()
    register_pages_operations(registry)
    return registry


__all__ = [
    'PAGES_OPERATIONS',
    'create_pages_registry',
    'register_pages_operations',
]
