"""
Declarative input schemas for tool arguments.

A schema is a tree of field constraints kept as data so it can be both
interpreted by the validator and rendered as JSON Schema for tool discovery.

Field kinds:
    StringField  - required or optional string (optionally nullable)
    EnumField    - string restricted to a closed set of literals
    ObjectField  - nested ObjectSchema
    ArrayField   - list whose items all satisfy one constraint
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

JSONSchema = Dict[str, Any]


@dataclass(frozen=True)
class StringField:
    """Free-form string value."""
    required: bool = True
    description: str = ""
    nullable: bool = False    # explicit null is a value, not "omitted"

    def to_json_schema(self) -> JSONSchema:
        schema: JSONSchema = {"type": ["string", "null"] if self.nullable else "string"}
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class EnumField:
    """String restricted to a closed set of values."""
    values: Tuple[str, ...]
    required: bool = True
    description: str = ""

    def to_json_schema(self) -> JSONSchema:
        schema: JSONSchema = {"type": "string", "enum": list(self.values)}
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class ObjectSchema:
    """Ordered mapping of field name to constraint."""
    fields: Dict[str, "FieldConstraint"] = field(default_factory=dict)

    def required_fields(self):
        return [name for name, constraint in self.fields.items() if constraint.required]

    def to_json_schema(self) -> JSONSchema:
        schema: JSONSchema = {
            "type": "object",
            "properties": {
                name: constraint.to_json_schema()
                for name, constraint in self.fields.items()
            },
        }
        required = self.required_fields()
        if required:
            schema["required"] = required
        return schema


@dataclass(frozen=True)
class ObjectField:
    """Nested object validated against its own schema."""
    schema: ObjectSchema
    required: bool = True
    description: str = ""

    def to_json_schema(self) -> JSONSchema:
        schema = self.schema.to_json_schema()
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class ArrayField:
    """List of items, each checked against ``items``."""
    items: Union[StringField, EnumField, ObjectField]
    required: bool = True
    description: str = ""

    def to_json_schema(self) -> JSONSchema:
        schema: JSONSchema = {"type": "array", "items": self.items.to_json_schema()}
        if self.description:
            schema["description"] = self.description
        return schema


FieldConstraint = Union[StringField, EnumField, ObjectField, ArrayField]


def string(description: str = "", required: bool = True, nullable: bool = False) -> StringField:
    return StringField(required=required, description=description, nullable=nullable)


def optional_string(description: str = "", nullable: bool = False) -> StringField:
    return StringField(required=False, description=description, nullable=nullable)


def enum(*values: str, description: str = "", required: bool = True) -> EnumField:
    return EnumField(values=tuple(values), required=required, description=description)


def obj(
    fields: Dict[str, FieldConstraint],
    description: str = "",
    required: bool = True
) -> ObjectField:
    return ObjectField(schema=ObjectSchema(fields), required=required, description=description)


def array(
    items: Union[StringField, EnumField, ObjectField],
    description: str = "",
    required: bool = True
) -> ArrayField:
    return ArrayField(items=items, required=required, description=description)


def describe(constraint: Optional[FieldConstraint]) -> str:
    """Short type name used in violation messages."""
    if isinstance(constraint, (StringField, EnumField)):
        return "string"
    if isinstance(constraint, ObjectField):
        return "object"
    if isinstance(constraint, ArrayField):
        return "array"
    return "unknown"
