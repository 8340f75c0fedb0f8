"""
Operation Registry - Typed catalog of GitHub Pages operations.

Provides:
- Operation descriptors with declarative input schemas
- Stable, ordered listing for tool discovery
- Uniform handler result type (OperationResult) and its envelope mapping
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel

from ..utils.response import UNKNOWN_ERROR_DETAILS, error_response, success_response
from ..validators.schema import JSONSchema, ObjectSchema

logger = logging.getLogger(__name__)


# ============================================================================
# Enums
# ============================================================================

class ErrorKind(Enum):
    """Failure classification."""
    VALIDATION = "validation"         # Arguments rejected by the schema
    UNKNOWN_TOOL = "unknown_tool"     # No operation with that name
    PRECONDITION = "precondition"     # Handler-local check, before any upstream call
    NOT_ENABLED = "not_enabled"       # Expected absence; a normal query outcome
    UPSTREAM = "upstream"             # GitHub API or transport failure


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class OperationResult:
    """Result of an operation execution."""
    success: bool
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    error_kind: Optional[ErrorKind] = None
    details: Any = None

    @classmethod
    def ok(cls, message: str = "", **data: Any) -> "OperationResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        details: Any = None
    ) -> "OperationResult":
        return cls(success=False, message=message, error_kind=kind, details=details)

    @property
    def is_error(self) -> bool:
        """Whether the transport should flag this result as an error.

        Expected absence is reported as ``success: false`` but is not an error.
        """
        return not self.success and self.error_kind is not ErrorKind.NOT_ENABLED

    def to_envelope(self) -> Dict[str, Any]:
        """Render the uniform response envelope."""
        if self.success:
            return success_response(self.message, **self.data)

        if self.error_kind is ErrorKind.UPSTREAM:
            details = self.details if self.details else UNKNOWN_ERROR_DETAILS
            return error_response(self.message, details=details)

        if self.details is not None:
            return error_response(self.message, details=self.details)
        return error_response(self.message)


OperationHandler = Callable[[Any, BaseModel], Awaitable[OperationResult]]


@dataclass(frozen=True)
class OperationMetadata:
    """Additional operation metadata."""
    read_only: bool = False       # Never changes upstream state
    destructive: bool = False     # May remove published content
    idempotent: bool = False      # Repeating the call has no further effect


@dataclass
class OperationDescriptor:
    """Describes one tool: name, schema, input model and handler."""
    name: str                          # Tool identifier (e.g., "enable_github_pages")
    description: str                   # Human-readable description
    input_schema: ObjectSchema         # Declarative argument constraints
    input_model: Type[BaseModel]       # Typed record built from validated arguments
    handler: OperationHandler          # async handler(client, params)
    metadata: Optional[OperationMetadata] = None

    def __post_init__(self):
        """Initialize metadata if not provided."""
        if self.metadata is None:
            self.metadata = OperationMetadata()

    def json_schema(self) -> JSONSchema:
        return self.input_schema.to_json_schema()


# ============================================================================
# Exceptions
# ============================================================================

class OperationRegistryError(Exception):
    """Base exception for registry errors."""
    pass


class OperationNotFound(OperationRegistryError):
    """Operation not found in registry."""
    pass


class OperationAlreadyRegistered(OperationRegistryError):
    """Operation already registered."""
    pass


class InvalidOperationDescriptor(OperationRegistryError):
    """Invalid operation descriptor."""
    pass


# ============================================================================
# Operation Registry
# ============================================================================

class OperationRegistry:
    """
    Ordered registry of tool operations.

    Operations are registered once at startup and never mutated afterwards;
    ``list()`` preserves registration order.
    """

    def __init__(self):
        """Initialize registry."""
        self._operations: Dict[str, OperationDescriptor] = {}

    # ========================================================================
    # Registration
    # ========================================================================

    def register(self, operation: OperationDescriptor) -> None:
        """
        Register a new operation.

        Args:
            operation: Operation descriptor to register

        Raises:
            OperationAlreadyRegistered: If operation name already exists
            InvalidOperationDescriptor: If descriptor validation fails
        """
        self._validate_descriptor(operation)

        if operation.name in self._operations:
            raise OperationAlreadyRegistered(
                f"Operation '{operation.name}' already registered"
            )

        self._operations[operation.name] = operation

        logger.info(
            f"Registered operation: {operation.name}"
        )

    def register_all(self, operations: List[OperationDescriptor]) -> None:
        """
        Register multiple operations at once.

        Args:
            operations: List of operation descriptors to register
        """
        for operation in operations:
            self.register(operation)

    # ========================================================================
    # Retrieval
    # ========================================================================

    def get(self, name: str) -> OperationDescriptor:
        """
        Retrieve an operation by name.

        Raises:
            OperationNotFound: If operation doesn't exist
        """
        if name not in self._operations:
            raise OperationNotFound(f"Unknown tool: {name}")

        return self._operations[name]

    def list(self) -> List[OperationDescriptor]:
        """List operations in registration order."""
        return list(self._operations.values())

    def exists(self, name: str) -> bool:
        """Check if operation exists."""
        return name in self._operations

    def __len__(self) -> int:
        return len(self._operations)

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    def _validate_descriptor(self, operation: OperationDescriptor) -> None:
        """
        Validate operation descriptor.

        Raises:
            InvalidOperationDescriptor: If validation fails
        """
        if not operation.name:
            raise InvalidOperationDescriptor("Operation name is required")

        if not operation.description:
            raise InvalidOperationDescriptor("Operation description is required")

        if not operation.handler:
            raise InvalidOperationDescriptor("Operation handler is required")

        if not isinstance(operation.input_schema, ObjectSchema):
            raise InvalidOperationDescriptor(
                f"Operation '{operation.name}' input_schema must be an ObjectSchema"
            )
