"""A .proto file: its descriptor bytes, declared messages and dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from google.protobuf import descriptor_pb2
from google.protobuf.message import DecodeError as ProtobufDecodeError

from ..exceptions import SchemaError, SchemaRegistrationError
from .raw import RawDescriptor

if TYPE_CHECKING:
    from ..models.base import BaseMessage


class ProtoFile:
    """One .proto file as seen by the registry.

    Creating a ProtoFile binds each declared message class to it (sets the
    class's ``proto_file``), so message classes can reach their descriptor.

    Attributes:
        name: File path as recorded in the descriptor, e.g.
            "wso2/discovery/subscription/subscription_list.proto"
        package: Protobuf package
        raw: Serialized FileDescriptorProto
        messages: Message classes in the order the descriptor declares them
        dependencies: ProtoFiles this file imports
    """

    def __init__(
        self,
        name: str,
        package: str,
        raw: RawDescriptor,
        messages: Sequence[type[BaseMessage]],
        dependencies: Sequence[ProtoFile] = (),
    ) -> None:
        self.name = name
        self.package = package
        self.raw = raw
        self.messages = tuple(messages)
        self.dependencies = tuple(dependencies)

        for message_class in self.messages:
            if message_class.proto_package != package:
                raise SchemaError(
                    f"{message_class.__name__} is in package {message_class.proto_package!r}, "
                    f"not {package!r}"
                )
            message_class.proto_file = self

    def file_descriptor_proto(self) -> descriptor_pb2.FileDescriptorProto:
        """Parse the raw bytes into a FileDescriptorProto.

        Raises:
            SchemaRegistrationError: If the bytes are not a valid descriptor
                or name a different file
        """
        file_proto = descriptor_pb2.FileDescriptorProto()
        try:
            file_proto.ParseFromString(self.raw.serialized)
        except ProtobufDecodeError as e:
            raise SchemaRegistrationError(f"{self.name}: malformed descriptor bytes: {e}") from e
        if file_proto.name != self.name:
            raise SchemaRegistrationError(
                f"Descriptor names file {file_proto.name!r}, expected {self.name!r}"
            )
        return file_proto

    def message_index(self, message_class: type[BaseMessage]) -> int:
        """Return the index of a message class within this file.

        Raises:
            SchemaError: If the class is not declared by this file
        """
        try:
            return self.messages.index(message_class)
        except ValueError as err:
            raise SchemaError(f"{message_class.__name__} is not declared in {self.name}") from err

    def __repr__(self) -> str:
        return f"ProtoFile({self.name!r})"
