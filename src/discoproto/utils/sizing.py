"""Message size calculation utilities.

This module provides functions to measure the protobuf encoding of a message
and of each of its fields.
"""

from __future__ import annotations

from pydantic import BaseModel

from ..codec.encoder import encode, fill_field
from ..codec.schema import MessageSchema
from ..descriptor.registry import default_registry


def encoded_size(message: BaseModel) -> int:
    """Calculate the encoded size of a message in bytes.

    Protobuf sizes depend on field values (varints, string lengths, number of
    repeated elements), so this takes an instance, not a class.

    Args:
        message: Message instance to measure

    Returns:
        Size in bytes, unknown fields included

    Raises:
        SchemaError: If the schema is invalid
        EncodeError: If a field value cannot be encoded

    Example:
        >>> encoded_size(SubscriptionList())
        0
        >>> encoded_size(SubscriptionList(list=[Subscription(api_id=1)]))
        4
    """
    return len(encode(message))


def field_sizes(message: BaseModel) -> dict[str, int]:
    """Get the encoded size in bytes of each field in a message.

    Sizes include the field keys (and, for repeated fields, every element's
    key and length prefix). Fields holding their zero value take 0 bytes.

    Args:
        message: Message instance to analyze

    Returns:
        Dictionary mapping field names to their size in bytes, in field-number order

    Raises:
        SchemaError: If the schema is invalid
        KeyError: If the message type is not registered
        EncodeError: If a field value cannot be encoded

    Example:
        >>> field_sizes(Subscription(subscription_id="s1", api_id=1))
        {'subscription_id': 4, 'policy_id': 0, 'api_id': 2, ...}
    """
    schema = MessageSchema.from_model(type(message))
    message_class = default_registry().dynamic_class(type(message).full_name())  # type: ignore[attr-defined]

    sizes: dict[str, int] = {}
    for field in schema.fields:
        proto = message_class()
        fill_field(proto, field, getattr(message, field.name))
        sizes[field.name] = proto.ByteSize()
    return sizes
