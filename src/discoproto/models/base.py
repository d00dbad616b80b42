"""Base message class and discoproto-specific Pydantic configuration.

This module provides the BaseMessage class that all protobuf-backed messages
inherit from. Each message class names its protobuf package and type, and is
bound to the ProtoFile that declares it.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

if TYPE_CHECKING:
    from google.protobuf.descriptor import Descriptor

    from ..descriptor.file import ProtoFile
    from ..descriptor.raw import DescriptorRef
    from ..descriptor.registry import SchemaRegistry

M = TypeVar("M", bound="BaseMessage")


class BaseMessage(BaseModel):
    """Base class for all protobuf-backed messages.

    Messages inherit from this class and declare fields with ProtoField() or
    RepeatedField(), which record the wire field number and proto type.

    Example:
        >>> class Subscription(BaseMessage):
        ...     subscription_id: str = ProtoField(1, "string", alias="subscriptionId")
        ...
        ...     proto_package: ClassVar[str] = "wso2.discovery.subscription"

    Attributes:
        proto_package: Protobuf package the message is declared in
        proto_name: Message name inside the package (defaults to the class name)
        proto_file: ProtoFile declaring this message, bound by ProtoFile itself
    """

    model_config = ConfigDict(
        strict=False,
        validate_assignment=True,
        # Unknown keyword arguments are errors; unknown wire fields are kept separately
        extra="forbid",
        # Accept both python attribute names and proto names
        populate_by_name=True,
    )

    proto_package: ClassVar[str] = ""
    proto_name: ClassVar[str | None] = None
    proto_file: ClassVar[ProtoFile | None] = None

    _unknown_fields: bytes = PrivateAttr(default=b"")

    @classmethod
    def full_name(cls) -> str:
        """Return the namespace-qualified protobuf type name."""
        name = cls.proto_name or cls.__name__
        if cls.proto_package:
            return f"{cls.proto_package}.{name}"
        return name

    @property
    def unknown_fields(self) -> bytes:
        """Raw bytes of fields that were not recognized while decoding."""
        return self._unknown_fields

    def reset(self) -> None:
        """Restore every field to its zero value and drop unknown fields."""
        for name, field_info in type(self).model_fields.items():
            setattr(self, name, field_info.get_default(call_default_factory=True))
        self._unknown_fields = b""

    def serialize(self) -> bytes:
        """Encode this message to protobuf wire format."""
        from ..codec.encoder import encode

        return encode(self)

    @classmethod
    def deserialize(cls: type[M], data: bytes) -> M:
        """Decode protobuf wire bytes into a new instance of this class."""
        from ..codec.decoder import decode

        return decode(cls, data)

    def byte_size(self) -> int:
        """Return the size of this message's encoding in bytes."""
        return len(self.serialize())

    def string_representation(self) -> str:
        """Render the message in protobuf text format for debugging.

        The output is deterministic for a given message but is not guaranteed
        to stay the same across versions. Do not use it for equality checks
        or persistence.
        """
        from ..codec.text import to_text

        return to_text(self)

    def __str__(self) -> str:
        return self.string_representation()

    @classmethod
    def proto_reflect(cls, registry: SchemaRegistry | None = None) -> Descriptor:
        """Return the registered protobuf descriptor for this message type.

        Args:
            registry: Registry to look the type up in; the process-wide
                default registry when omitted

        Raises:
            KeyError: If the type is not registered
        """
        from ..descriptor.registry import default_registry

        if registry is None:
            registry = default_registry()
        return registry.find_descriptor(cls.full_name())

    @classmethod
    def descriptor(cls) -> DescriptorRef:
        """Return the compressed file descriptor and this message's index in it.

        Deprecated: use proto_reflect() instead. Kept for callers that still
        consume the gzip-compressed FileDescriptorProto directly.

        Raises:
            SchemaError: If the class is not bound to a ProtoFile
        """
        warnings.warn(
            f"{cls.__name__}.descriptor() is deprecated, use proto_reflect() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        from ..descriptor.raw import DescriptorRef
        from ..exceptions import SchemaError

        proto_file = cls.proto_file
        if proto_file is None:
            raise SchemaError(f"{cls.__name__} is not declared by any ProtoFile")
        return DescriptorRef(
            full_name=cls.full_name(),
            file_descriptor=proto_file.raw.compressed,
            path=(proto_file.message_index(cls),),
        )
