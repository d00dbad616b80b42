"""Protobuf binary encoder for Pydantic messages.

This module provides the encode() function that converts a message instance
to the protobuf wire format. The bytes are produced by a google.protobuf
message built from the registered descriptor; the model only supplies the
field values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from google.protobuf.message import DecodeError as ProtobufDecodeError
from google.protobuf.message import Message
from pydantic import BaseModel

from ..exceptions import EncodeError
from .schema import FieldSchema, MessageSchema

if TYPE_CHECKING:
    from ..descriptor.registry import SchemaRegistry


def encode(message: BaseModel, registry: Optional[SchemaRegistry] = None) -> bytes:
    """Encode a message to protobuf wire format.

    Fields are written in ascending field-number order. Scalar fields holding
    their proto3 zero value are omitted, each element of a repeated message
    field is written as its own length-delimited entry, and preserved unknown
    fields are appended verbatim. An empty message encodes to ``b""``.

    Args:
        message: Message instance to encode
        registry: Registry holding the message's descriptor; the process-wide
            default registry when omitted

    Returns:
        Protobuf wire bytes

    Raises:
        SchemaError: If the message schema is invalid
        EncodeError: If the type is not registered or a field value is
            invalid (None element, wrong type, integer out of range)

    Example:
        >>> msg = SubscriptionList(list=[Subscription(subscription_id="s1")])
        >>> encode(msg)
        b'\\x12\\x04\\n\\x02s1'
    """
    if registry is None:
        from ..descriptor.registry import default_registry

        registry = default_registry()
    return registry.encode(message)  # type: ignore[arg-type]


def fill_message(proto: Message, message: BaseModel) -> None:
    """Copy a model's field values and unknown fields into a protobuf message.

    Args:
        proto: Empty protobuf message of the matching descriptor
        message: Model instance to copy from

    Raises:
        EncodeError: If a field value is invalid
    """
    schema = MessageSchema.from_model(type(message))

    for field_schema in schema.fields:
        fill_field(proto, field_schema, getattr(message, field_schema.name))

    unknown_fields = getattr(message, "unknown_fields", b"")
    if unknown_fields:
        try:
            proto.MergeFromString(unknown_fields)
        except ProtobufDecodeError as e:
            raise EncodeError(
                f"{type(message).__name__}: preserved unknown fields are malformed: {e}"
            ) from e


def fill_field(proto: Message, field_schema: FieldSchema, value: Any) -> None:
    """Set a single field of a protobuf message.

    Args:
        proto: Protobuf message to write to
        field_schema: Schema information for the field
        value: Field value to set

    Raises:
        EncodeError: If value is invalid
    """
    if value is None:
        raise EncodeError(f"Field {field_schema.name} is None; use the zero value instead")

    # Repeated message field: one sub-message per element
    if field_schema.repeated:
        if not isinstance(value, (list, tuple)):
            raise EncodeError(
                f"Field {field_schema.name}: expected a list, got {type(value).__name__}"
            )
        container = getattr(proto, field_schema.proto_name)
        for index, item in enumerate(value):
            if item is None:
                raise EncodeError(f"Field {field_schema.name}: element {index} is None")
            if field_schema.is_message and not isinstance(item, field_schema.message_type):  # type: ignore[arg-type]
                raise EncodeError(
                    f"Field {field_schema.name}: element {index} must be "
                    f"{field_schema.message_type.__name__}, got {type(item).__name__}"  # type: ignore[union-attr]
                )
            fill_message(container.add(), item)
        return

    # bool is an int subclass, so check it both ways
    expected_type = field_schema.python_type
    if not isinstance(value, expected_type) or (
        isinstance(value, bool) and expected_type is not bool
    ):
        raise EncodeError(
            f"Field {field_schema.name}: expected {expected_type.__name__}, "
            f"got {type(value).__name__}"
        )

    try:
        setattr(proto, field_schema.proto_name, value)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Field {field_schema.name}: {e}") from e
