"""GitHub Pages tools: discovery and dispatch."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from mcp import Tool
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..registry.operation_registry import (
    ErrorKind,
    OperationDescriptor,
    OperationNotFound,
    OperationRegistry,
    OperationResult,
)
from ..registry.operations import create_pages_registry
from ..validators.validator import FieldViolation, format_violations, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResponse:
    """Envelope plus the transport-level error flag."""
    envelope: Dict[str, Any]
    is_error: bool


class PagesTools:
    """Routes tool calls through validation to the registered handlers."""

    def __init__(self, client: Any, registry: Optional[OperationRegistry] = None):
        """Initialize with the upstream client and operation registry.

        Args:
            client: GitHub API client shared by all handlers (read-only)
            registry: Operation registry (default: the five Pages operations)
        """
        self.client = client
        self.registry = registry if registry is not None else create_pages_registry()

    def get_tools(self) -> List[Tool]:
        """Return one MCP tool per registered operation, in registry order."""
        return [self._to_tool(operation) for operation in self.registry.list()]

    @staticmethod
    def _to_tool(operation: OperationDescriptor) -> Tool:
        metadata = operation.metadata
        return Tool(
            name=operation.name,
            description=operation.description,
            inputSchema=operation.json_schema(),
            annotations=ToolAnnotations(
                readOnlyHint=metadata.read_only,
                destructiveHint=metadata.destructive,
                idempotentHint=metadata.idempotent,
                openWorldHint=True,
            ),
        )

    async def handle_tool(self, name: str, arguments: Optional[dict]) -> ToolResponse:
        """Route tool call to appropriate handler.

        Args:
            name: Tool name
            arguments: Raw tool arguments

        Returns:
            ToolResponse carrying the response envelope
        """
        result = await self.execute(name, arguments)
        return ToolResponse(envelope=result.to_envelope(), is_error=result.is_error)

    async def execute(self, name: str, arguments: Optional[dict]) -> OperationResult:
        """Look up, validate and run one operation."""
        try:
            operation = self.registry.get(name)
        except OperationNotFound as e:
            logger.warning(str(e))
            return OperationResult.failure(ErrorKind.UNKNOWN_TOOL, str(e))

        validation = validate(operation.input_schema, arguments)
        if not validation.is_valid:
            return self._validation_failure(name, validation.violations)

        try:
            params = operation.input_model.model_validate(validation.value)
        except ValidationError as e:
            violations = [
                FieldViolation(_loc_to_path(error["loc"]), error["msg"])
                for error in e.errors()
            ]
            return self._validation_failure(name, violations)

        try:
            return await operation.handler(self.client, params)
        except Exception as e:
            logger.exception(f"Error executing tool {name}: {e}")
            return OperationResult.failure(
                ErrorKind.UPSTREAM,
                str(e) or type(e).__name__,
            )

    @staticmethod
    def _validation_failure(name: str, violations: List[FieldViolation]) -> OperationResult:
        message = format_violations(violations)
        logger.info(f"Rejected {name} call: {message}")
        return OperationResult.failure(
            ErrorKind.VALIDATION,
            message,
            details=[violation.to_dict() for violation in violations],
        )


def _loc_to_path(loc) -> str:
    """Render a pydantic error location as ``files[0].path``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "(root)"
