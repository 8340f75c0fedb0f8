"""
Tool argument schemas and validation.

Schemas are data (see schema.py); validator.py interprets them.
"""

from .schema import (
    ArrayField,
    EnumField,
    FieldConstraint,
    ObjectField,
    ObjectSchema,
    StringField,
)
from .validator import (
    FieldViolation,
    ValidationResult,
    format_enum_violation,
    format_violations,
    validate,
)

__all__ = [
    'ArrayField',
    'EnumField',
    'FieldConstraint',
    'ObjectField',
    'ObjectSchema',
    'StringField',
    'FieldViolation',
    'ValidationResult',
    'format_enum_violation',
    'format_violations',
    'validate',
]
