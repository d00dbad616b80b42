"""Protobuf binary decoder for Pydantic messages.

This module provides the decode() function that converts protobuf wire bytes
back to a message instance. Parsing is done by a google.protobuf message built
from the registered descriptor; the parsed values are then validated into the
model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, TypeVar

from google.protobuf.message import Message
from pydantic import ValidationError

from ..exceptions import DecodeError
from ..models.base import BaseMessage
from .schema import MessageSchema

if TYPE_CHECKING:
    from ..descriptor.registry import SchemaRegistry

T = TypeVar("T", bound=BaseMessage)


def decode(message_class: type[T], data: bytes, registry: Optional[SchemaRegistry] = None) -> T:
    """Decode protobuf wire bytes to a message.

    Fields may appear in any order; for a repeated field every occurrence is
    appended, for a singular field the last occurrence wins. Fields the
    descriptor does not declare, group-encoded ones included, are kept in the
    message's unknown fields and written back by encode().

    Args:
        message_class: Message class to decode to
        data: Binary data to decode
        registry: Registry holding the message's descriptor; the process-wide
            default registry when omitted

    Returns:
        Decoded message instance

    Raises:
        DecodeError: If the class is not registered, or the data is truncated,
            uses an invalid key, or doesn't match the schema

    Example:
        >>> decoded = decode(SubscriptionList, b"")
        >>> decoded.get_list()
        []
    """
    if registry is None:
        from ..descriptor.registry import default_registry

        registry = default_registry()

    full_name = message_class.full_name()
    if not registry.is_registered(full_name) or (
        registry.find_message_class(full_name) is not message_class
    ):
        raise DecodeError(f"Message type {full_name} is not registered")
    return registry.decode(full_name, data)  # type: ignore[return-value]


def read_message(message_class: type[T], proto: Message) -> T:
    """Build a model instance from a parsed protobuf message.

    Args:
        message_class: Model class matching the message's descriptor
        proto: Parsed protobuf message

    Returns:
        Model instance, with the message's unknown fields preserved

    Raises:
        DecodeError: If the parsed values fail model validation
    """
    schema = MessageSchema.from_model(message_class)

    field_values: dict[str, Any] = {}
    for field_schema in schema.fields:
        value = getattr(proto, field_schema.proto_name)
        if field_schema.is_message:
            field_values[field_schema.name] = [
                read_message(field_schema.message_type, item)  # type: ignore[arg-type]
                for item in value
            ]
        else:
            field_values[field_schema.name] = value

    try:
        decoded_message = message_class(**field_values)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {message_class.__name__}: {e}") from e

    decoded_message._unknown_fields = unknown_fields(proto)
    return decoded_message


def unknown_fields(proto: Message) -> bytes:
    """Return the wire bytes of a message's own unknown fields.

    Unknown fields of nested messages stay with those messages.
    """
    unknown_only = type(proto)()
    unknown_only.CopyFrom(proto)
    # Clearing known fields leaves the unknown field set untouched
    for field_descriptor, _ in unknown_only.ListFields():
        unknown_only.ClearField(field_descriptor.name)
    return unknown_only.SerializeToString()
