"""Field type helpers and utilities.

This module provides convenience functions for declaring message fields
together with their protobuf tag and type.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

# Proto scalar type -> (python type, zero value, inclusive bounds or None)
SCALAR_TYPES: dict[str, tuple[type, Any, tuple[int, int] | None]] = {
    "string": (str, "", None),
    "bytes": (bytes, b"", None),
    "bool": (bool, False, None),
    "int32": (int, 0, (-(2**31), 2**31 - 1)),
    "int64": (int, 0, (-(2**63), 2**63 - 1)),
    "uint32": (int, 0, (0, 2**32 - 1)),
    "uint64": (int, 0, (0, 2**64 - 1)),
}

MESSAGE_TYPE = "message"


def ProtoField(number: int, proto_type: str, **kwargs: Any) -> FieldInfo:
    """Create a singular scalar field bound to a protobuf field number.

    The default is the proto3 zero value of ``proto_type`` unless one is given.
    Integer types also get ``ge=``/``le=`` constraints matching their width,
    so out-of-range values are rejected at assignment time.

    Args:
        number: Wire field number (1 to 2^29-1)
        proto_type: One of "string", "bytes", "bool", "int32", "int64",
            "uint32", "uint64"
        **kwargs: Additional Field() arguments (alias, description, etc.).
            ``alias`` doubles as the field's proto name.

    Returns:
        Pydantic FieldInfo suitable for use as a field default.

    Example:
        >>> class Subscription(BaseMessage):
        ...     subscription_id: str = ProtoField(1, "string", alias="subscriptionId")
        ...     api_id: int = ProtoField(3, "int32", alias="apiId")
    """
    if proto_type not in SCALAR_TYPES:
        raise ValueError(
            f"Unsupported proto type {proto_type!r}; expected one of {sorted(SCALAR_TYPES)}"
        )

    _, zero_value, bounds = SCALAR_TYPES[proto_type]
    if "default" not in kwargs and "default_factory" not in kwargs:
        kwargs["default"] = zero_value
    if bounds is not None:
        kwargs.setdefault("ge", bounds[0])
        kwargs.setdefault("le", bounds[1])

    return cast(
        FieldInfo,
        Field(json_schema_extra={"proto_number": number, "proto_type": proto_type}, **kwargs),
    )


def RepeatedField(number: int, proto_type: str = MESSAGE_TYPE, **kwargs: Any) -> FieldInfo:
    """Create a repeated field bound to a protobuf field number.

    The field defaults to a fresh empty list, so it is never None.

    Args:
        number: Wire field number (1 to 2^29-1)
        proto_type: Proto type of the elements (only "message" is supported)
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default.

    Example:
        >>> class SubscriptionList(BaseMessage):
        ...     list: List[Subscription] = RepeatedField(2)
    """
    return cast(
        FieldInfo,
        Field(
            default_factory=list,
            json_schema_extra={"proto_number": number, "proto_type": proto_type},
            **kwargs,
        ),
    )
