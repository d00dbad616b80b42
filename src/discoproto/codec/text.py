"""Protobuf text-format rendering for debugging output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from google.protobuf import text_format
from pydantic import BaseModel

if TYPE_CHECKING:
    from ..descriptor.registry import SchemaRegistry


def to_text(
    message: BaseModel,
    *,
    as_one_line: bool = False,
    registry: Optional[SchemaRegistry] = None,
) -> str:
    """Render a message in protobuf text format.

    Fields are listed in field-number order under their proto names; scalar
    fields holding their zero value are left out, as in the wire encoding.
    Unknown fields are not rendered.

    Args:
        message: Message to render
        as_one_line: Join entries with spaces instead of newlines
        registry: Registry holding the message's descriptor; the process-wide
            default registry when omitted

    Returns:
        Text-format string (empty for an empty message)

    Raises:
        EncodeError: If the type is not registered or a field value is invalid

    Example:
        >>> print(to_text(SubscriptionList(list=[Subscription(api_id=7)])))
        list {
          apiId: 7
        }
    """
    if registry is None:
        from ..descriptor.registry import default_registry

        registry = default_registry()
    proto = registry.to_proto(message)  # type: ignore[arg-type]
    return text_format.MessageToString(proto, as_one_line=as_one_line)
