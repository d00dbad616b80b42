"""Schema introspection for Pydantic message models.

This module analyzes message models and extracts the protobuf-relevant
information for each field: tag number, proto type and cardinality.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, List, Optional, Type, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from ..models.fields import MESSAGE_TYPE, SCALAR_TYPES

MAX_FIELD_NUMBER = (1 << 29) - 1
RESERVED_FIELD_NUMBERS = range(19000, 20000)


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Python attribute name
        proto_name: Field name in the .proto file (the alias when one is set)
        number: Wire field number
        proto_type: Proto type name ("string", "int32", "message", ...)
        repeated: Whether the field is a repeated field
        python_type: Python type of one value
        message_type: Message class for message-typed fields
        default: Zero value (empty list for repeated fields)
    """

    name: str
    proto_name: str
    number: int
    proto_type: str
    repeated: bool
    python_type: Type[Any]
    message_type: Optional[Type[BaseModel]]
    default: Any

    @property
    def is_message(self) -> bool:
        return self.proto_type == MESSAGE_TYPE

    def bounds(self) -> tuple[int, int] | None:
        """Return the inclusive integer range of the proto type, if any."""
        if self.proto_type in SCALAR_TYPES:
            return SCALAR_TYPES[self.proto_type][2]
        return None


class MessageSchema:
    """Schema information for an entire message.

    Fields are kept in ascending field-number order.

    Example:
        >>> schema = MessageSchema.from_model(SubscriptionList)
        >>> [(f.name, f.number) for f in schema.fields]
        [('list', 2)]
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect

        Raises:
            SchemaError: If a field is missing its tag, uses an unsupported
                type, or reuses a field number
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._by_number: dict[int, FieldSchema] = {}
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> MessageSchema:
        """Return the (cached) schema of a Pydantic model.

        Args:
            model_class: Pydantic model class

        Returns:
            MessageSchema instance
        """
        return _schema_for(model_class)

    def field_by_number(self, number: int) -> Optional[FieldSchema]:
        """Return the field with the given wire number, or None if unknown."""
        return self._by_number.get(number)

    def field_by_name(self, name: str) -> Optional[FieldSchema]:
        """Return the field with the given python or proto name."""
        for field in self.fields:
            if name in (field.name, field.proto_name):
                return field
        return None

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        for field_name, field_info in self.model_class.model_fields.items():
            field_schema = self._extract_field_schema(field_name, field_info)
            existing = self._by_number.get(field_schema.number)
            if existing is not None:
                raise SchemaError(
                    f"{self.model_class.__name__}: fields {existing.name} and {field_name} "
                    f"both use field number {field_schema.number}"
                )
            self._by_number[field_schema.number] = field_schema
            self.fields.append(field_schema)

        self.fields.sort(key=lambda f: f.number)

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Extract schema information from a Pydantic FieldInfo.

        Args:
            name: Field name
            field_info: Pydantic FieldInfo object

        Returns:
            FieldSchema with extracted information
        """
        extra = field_info.json_schema_extra
        if not isinstance(extra, dict) or "proto_number" not in extra:
            raise SchemaError(
                f"Field {name} has no protobuf field number; "
                f"declare it with ProtoField() or RepeatedField()"
            )

        number = extra["proto_number"]
        proto_type = extra["proto_type"]
        if not isinstance(number, int) or not 1 <= number <= MAX_FIELD_NUMBER:
            raise SchemaError(f"Field {name}: field number must be 1-{MAX_FIELD_NUMBER}, got {number}")
        if number in RESERVED_FIELD_NUMBERS:
            raise SchemaError(f"Field {name}: field numbers 19000-19999 are reserved, got {number}")
        if proto_type != MESSAGE_TYPE and proto_type not in SCALAR_TYPES:
            raise SchemaError(f"Field {name}: unsupported proto type {proto_type!r}")

        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        repeated = False
        if get_origin(annotation) is list:
            repeated = True
            list_args = get_args(annotation)
            if not list_args:
                raise SchemaError(f"Field {name}: repeated fields need an element type")
            annotation = list_args[0]

        message_type = None
        if proto_type == MESSAGE_TYPE:
            if not repeated:
                raise SchemaError(
                    f"Field {name}: singular message fields are not supported; use List[...]"
                )
            if not (isinstance(annotation, type) and issubclass(annotation, BaseModel)):
                raise SchemaError(
                    f"Field {name}: message fields must hold a BaseMessage subclass, "
                    f"got {annotation}"
                )
            message_type = annotation
        else:
            if repeated:
                raise SchemaError(
                    f"Field {name}: repeated {proto_type} fields are not supported"
                )
            expected_type = SCALAR_TYPES[proto_type][0]
            if annotation is not expected_type:
                raise SchemaError(
                    f"Field {name}: proto type {proto_type} needs a {expected_type.__name__} "
                    f"annotation, got {annotation}"
                )

        return FieldSchema(
            name=name,
            proto_name=field_info.alias or name,
            number=number,
            proto_type=proto_type,
            repeated=repeated,
            python_type=annotation,
            message_type=message_type,
            default=field_info.get_default(call_default_factory=True),
        )


@functools.lru_cache(maxsize=None)
def _schema_for(model_class: Type[BaseModel]) -> MessageSchema:
    return MessageSchema(model_class)
