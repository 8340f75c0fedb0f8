"""
Operation Registry for github-pages-mcp-server.

Provides typed, discoverable catalog of tool operations.
"""

from .operation_registry import (
    ErrorKind,
    OperationDescriptor,
    OperationMetadata,
    OperationRegistry,
    OperationResult,
    # Exceptions
    InvalidOperationDescriptor,
    OperationAlreadyRegistered,
    OperationNotFound,
    OperationRegistryError,
)

__all__ = [
    'ErrorKind',
    'OperationDescriptor',
    'OperationMetadata',
    'OperationRegistry',
    'OperationResult',
    # Exceptions
    'InvalidOperationDescriptor',
    'OperationAlreadyRegistered',
    'OperationNotFound',
    'OperationRegistryError',
]
