"""discoproto: protobuf messages of the wso2 discovery subscription API

A Python library for the ``wso2.discovery.subscription`` protobuf messages.
Messages are Pydantic models whose fields carry their protobuf tags; a
codec driven by the registered descriptors reads and writes the standard protobuf wire format,
byte-compatible with other language bindings of the same schema.

Key Features:
- Pydantic-based message modeling
- Protobuf wire encoding with unknown-field preservation
- Schema registry backed by a google.protobuf DescriptorPool
- Lazily compressed/decompressed file descriptors

Quick Start:
    >>> from discoproto import Subscription, SubscriptionList, encode, decode
    >>>
    >>> msg = SubscriptionList(list=[Subscription(subscription_id="s1", api_id=7)])
    >>> data = encode(msg)
    >>> decoded = decode(SubscriptionList, data)
    >>> decoded.get_list()[0].api_id
    7
"""

from __future__ import annotations

from .codec import decode, encode, to_text
from .descriptor import (
    DescriptorRef,
    ProtoFile,
    RawDescriptor,
    SchemaRegistry,
    build_registry,
    default_registry,
    to_file_descriptor,
    to_proto_schema,
)
from .exceptions import (
    DecodeError,
    DiscoprotoError,
    EncodeError,
    SchemaError,
    SchemaRegistrationError,
)
from .models import BaseMessage, ProtoField, RepeatedField
from .subscription import (
    SUBSCRIPTION_LIST_PROTO,
    SUBSCRIPTION_PROTO,
    Subscription,
    SubscriptionList,
)
from .utils import encoded_size, field_sizes

# Registers the bundled schemas; a model/descriptor mismatch raises here
default_registry()

__version__ = "0.1.0"

__all__ = [
    # Core API
    "BaseMessage",
    "encode",
    "decode",
    "to_text",
    # Field helpers
    "ProtoField",
    "RepeatedField",
    # Messages
    "Subscription",
    "SubscriptionList",
    "SUBSCRIPTION_PROTO",
    "SUBSCRIPTION_LIST_PROTO",
    # Descriptors
    "RawDescriptor",
    "DescriptorRef",
    "ProtoFile",
    "SchemaRegistry",
    "build_registry",
    "default_registry",
    "to_file_descriptor",
    "to_proto_schema",
    # Exceptions
    "DiscoprotoError",
    "SchemaError",
    "SchemaRegistrationError",
    "EncodeError",
    "DecodeError",
    # Sizing
    "encoded_size",
    "field_sizes",
    # Version
    "__version__",
]
