"""Validation of raw tool arguments against declarative schemas."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .schema import (
    ArrayField,
    EnumField,
    FieldConstraint,
    ObjectField,
    ObjectSchema,
    StringField,
    describe,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldViolation:
    """One failed constraint, addressed by its path from the root."""
    field_path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field_path, "message": self.message}


@dataclass
class ValidationResult:
    """Result of validation."""
    is_valid: bool
    value: Optional[Dict[str, Any]] = None
    violations: List[FieldViolation] = field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [f"{v.field_path}: {v.message}" for v in self.violations]


def json_type_name(value: Any) -> str:
    """Name a Python value by its JSON type."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def format_enum_violation(value: Any, allowed) -> str:
    allowed_text = ", ".join(f"'{v}'" for v in allowed)
    return f"invalid value '{value}', expected one of: {allowed_text}"


def format_violations(violations: List[FieldViolation]) -> str:
    """Join violations into one human-readable error string."""
    parts = [f"{v.field_path}: {v.message}" for v in violations]
    return "Invalid arguments: " + ", ".join(parts)


def validate(schema: ObjectSchema, raw: Any) -> ValidationResult:
    """
    Validate raw arguments against a schema.

    Every violation found is reported, not just the first. Unknown keys
    are dropped from the cleaned value; explicit nulls on optional,
    non-nullable fields are treated as omitted.

    Args:
        schema: Root object schema
        raw: Untyped input (normally the decoded JSON arguments)

    Returns:
        ValidationResult with the cleaned value when valid
    """
    violations: List[FieldViolation] = []

    if raw is None:
        raw = {}

    if not isinstance(raw, dict):
        violations.append(FieldViolation("(root)", f"expected object, received {json_type_name(raw)}"))
        return ValidationResult(is_valid=False, violations=violations)

    cleaned = _validate_object(schema, raw, "", violations)

    if violations:
        logger.debug(f"Validation failed with {len(violations)} violation(s)")
        return ValidationResult(is_valid=False, violations=violations)

    return ValidationResult(is_valid=True, value=cleaned)


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def _validate_object(
    schema: ObjectSchema,
    raw: Dict[str, Any],
    prefix: str,
    violations: List[FieldViolation]
) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}

    for name, constraint in schema.fields.items():
        path = _join(prefix, name)
        present = name in raw
        value = raw.get(name)

        if value is None and not (present and _is_nullable(constraint)):
            if constraint.required:
                violations.append(FieldViolation(path, "required"))
            continue

        cleaned[name] = _validate_value(constraint, value, path, violations)

    return cleaned


def _is_nullable(constraint: FieldConstraint) -> bool:
    return isinstance(constraint, StringField) and constraint.nullable


def _validate_value(
    constraint: FieldConstraint,
    value: Any,
    path: str,
    violations: List[FieldViolation]
) -> Any:
    if value is None:
        # Only reached for nullable fields
        return None

    if isinstance(constraint, StringField):
        if not isinstance(value, str):
            violations.append(FieldViolation(
                path, f"expected string, received {json_type_name(value)}"
            ))
        return value

    if isinstance(constraint, EnumField):
        if not isinstance(value, str):
            violations.append(FieldViolation(
                path, f"expected string, received {json_type_name(value)}"
            ))
        elif value not in constraint.values:
            violations.append(FieldViolation(
                path, format_enum_violation(value, constraint.values)
            ))
        return value

    if isinstance(constraint, ObjectField):
        if not isinstance(value, dict):
            violations.append(FieldViolation(
                path, f"expected object, received {json_type_name(value)}"
            ))
            return value
        return _validate_object(constraint.schema, value, path, violations)

    if isinstance(constraint, ArrayField):
        if not isinstance(value, (list, tuple)):
            violations.append(FieldViolation(
                path, f"expected array, received {json_type_name(value)}"
            ))
            return value
        items = []
        for index, item in enumerate(value):
            item_path = f"{path}[{index}]"
            if item is None:
                violations.append(FieldViolation(
                    item_path, f"expected {describe(constraint.items)}, received null"
                ))
                continue
            items.append(_validate_value(constraint.items, item, item_path, violations))
        return items

    raise TypeError(f"Unsupported constraint at '{path}': {constraint!r}")
