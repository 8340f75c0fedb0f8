"""Standardized response envelopes for MCP tools."""

from typing import Any, Dict, Optional

UNKNOWN_ERROR_DETAILS = "Unknown error"

_MISSING = object()


def is_success(result: Dict[str, Any]) -> bool:
    """Check if an envelope reports success."""
    return bool(result.get("success"))


def success_response(
    message: Optional[str] = None,
    **payload: Any
) -> Dict[str, Any]:
    """Create a successful response envelope.

    Args:
        message: Optional human-readable summary
        **payload: Operation-specific fields, copied into the envelope

    Returns:
        ``{"success": True, "message": ..., **payload}``
    """
    response: Dict[str, Any] = {"success": True}

    if message:
        response["message"] = message

    response.update(payload)
    return response


def error_response(
    message: str,
    details: Any = _MISSING
) -> Dict[str, Any]:
    """Create an error response envelope.

    Args:
        message: Error message
        details: Optional diagnostic data (upstream body, violations);
            omitted from the envelope when not given

    Returns:
        ``{"success": False, "error": message[, "details": details]}``
    """
    response: Dict[str, Any] = {
        "success": False,
        "error": message
    }

    if details is not _MISSING:
        response["details"] = details

    return response
