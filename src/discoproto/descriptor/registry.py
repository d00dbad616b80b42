"""Schema registry: binds message models to their protobuf descriptors.

A SchemaRegistry registers ProtoFiles into its own google.protobuf
DescriptorPool, checks that the message models agree with the descriptors,
and lets generic code find descriptors and message classes by
fully-qualified name.

Example:
    >>> registry = SchemaRegistry()
    >>> registry.register(SUBSCRIPTION_PROTO)
    >>> registry.register(SUBSCRIPTION_LIST_PROTO)
    >>> registry.decode("wso2.discovery.subscription.SubscriptionList", data)
"""

from __future__ import annotations

import logging
import threading
from typing import Any, NoReturn, Optional, Sequence

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.descriptor import Descriptor, FileDescriptor
from google.protobuf.message import DecodeError as ProtobufDecodeError
from google.protobuf.message import EncodeError as ProtobufEncodeError
from google.protobuf.message import Message

from ..codec.decoder import read_message
from ..codec.encoder import fill_message
from ..codec.schema import MessageSchema
from ..exceptions import DecodeError, EncodeError, SchemaError, SchemaRegistrationError
from ..models.base import BaseMessage
from .builder import PROTO_TYPE_NAMES
from .file import ProtoFile

logger = logging.getLogger(__name__)

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto


class SchemaRegistry:
    """Registry of protobuf files and the message classes they declare.

    Registration is idempotent and serialized by a lock; lookups after
    registration are safe from any number of threads.
    """

    def __init__(self) -> None:
        self._pool = descriptor_pool.DescriptorPool()
        self._files: dict[str, ProtoFile] = {}
        self._classes: dict[str, type[BaseMessage]] = {}
        self._lock = threading.RLock()

    def register(self, proto_file: ProtoFile, *, recursive: bool = False) -> FileDescriptor:
        """Register a .proto file and the message classes it declares.

        Registering the same file again is a no-op. Every dependency must be
        registered first, unless ``recursive`` is set, in which case missing
        dependencies are registered before the file itself.

        Args:
            proto_file: File to register
            recursive: Register missing dependencies first

        Returns:
            The FileDescriptor built by the descriptor pool

        Raises:
            SchemaRegistrationError: If a dependency is missing, a different
                descriptor is already registered under the same name, or the
                models disagree with the descriptor
        """
        with self._lock:
            existing = self._files.get(proto_file.name)
            if existing is not None:
                if existing is not proto_file and existing.raw != proto_file.raw:
                    self._fail(f"{proto_file.name} is already registered with a different descriptor")
                logger.debug("%s already registered, skipping", proto_file.name)
                return self._pool.FindFileByName(proto_file.name)

            for dependency in proto_file.dependencies:
                if dependency.name in self._files:
                    continue
                if not recursive:
                    self._fail(
                        f"{proto_file.name} depends on {dependency.name}, which is not registered"
                    )
                self.register(dependency, recursive=True)

            file_proto = proto_file.file_descriptor_proto()
            for dependency_name in file_proto.dependency:
                if dependency_name not in self._files:
                    self._fail(
                        f"{proto_file.name} imports {dependency_name}, which is not registered"
                    )

            self._check_models(proto_file, file_proto)

            try:
                self._pool.AddSerializedFile(proto_file.raw.serialized)
                file_descriptor = self._pool.FindFileByName(proto_file.name)
            except (TypeError, KeyError, ValueError) as e:
                self._fail(f"Descriptor pool rejected {proto_file.name}: {e}", cause=e)

            self._files[proto_file.name] = proto_file
            for message_class in proto_file.messages:
                self._classes[message_class.full_name()] = message_class

            logger.debug(
                "Registered %s (%s)",
                proto_file.name,
                ", ".join(cls.full_name() for cls in proto_file.messages),
            )
            return file_descriptor

    def _check_models(
        self, proto_file: ProtoFile, file_proto: descriptor_pb2.FileDescriptorProto
    ) -> None:
        """Verify every declared model matches its DescriptorProto."""
        if len(file_proto.message_type) != len(proto_file.messages):
            self._fail(
                f"{proto_file.name} declares {len(file_proto.message_type)} messages, "
                f"but {len(proto_file.messages)} classes are bound to it"
            )

        for message_class, message_proto in zip(proto_file.messages, file_proto.message_type):
            full_name = message_class.full_name()
            if full_name != f"{file_proto.package}.{message_proto.name}":
                self._fail(
                    f"{message_class.__name__} is {full_name}, but {proto_file.name} declares "
                    f"{file_proto.package}.{message_proto.name} at the same index"
                )

            registered = self._classes.get(full_name)
            if registered is not None and registered is not message_class:
                self._fail(f"{full_name} is already registered to {registered.__name__}")

            try:
                schema = MessageSchema.from_model(message_class)
            except SchemaError as e:
                self._fail(f"{full_name}: invalid model schema: {e}", cause=e)

            declared_numbers = set()
            for field_proto in message_proto.field:
                declared_numbers.add(field_proto.number)
                self._check_field(full_name, schema, field_proto)

            for field in schema.fields:
                if field.number not in declared_numbers:
                    self._fail(
                        f"{full_name}: model field {field.name} (number {field.number}) "
                        f"is not in the descriptor"
                    )

    def _check_field(
        self, full_name: str, schema: MessageSchema, field_proto: FieldDescriptorProto
    ) -> None:
        field = schema.field_by_number(field_proto.number)
        if field is None:
            self._fail(
                f"{full_name}: descriptor field {field_proto.name} (number {field_proto.number}) "
                f"has no model field"
            )

        if field.proto_name != field_proto.name:
            self._fail(
                f"{full_name}: field {field_proto.number} is named {field_proto.name} in the "
                f"descriptor but {field.proto_name} in the model"
            )

        descriptor_type = PROTO_TYPE_NAMES.get(field_proto.type)
        if descriptor_type != field.proto_type:
            self._fail(
                f"{full_name}.{field_proto.name}: descriptor type {descriptor_type or field_proto.type} "
                f"does not match model type {field.proto_type}"
            )

        repeated = field_proto.label == FieldDescriptorProto.LABEL_REPEATED
        if repeated != field.repeated:
            self._fail(
                f"{full_name}.{field_proto.name}: descriptor and model disagree on repeated"
            )

        if field.is_message:
            expected = "." + field.message_type.full_name()  # type: ignore[attr-defined]
            if field_proto.type_name != expected:
                self._fail(
                    f"{full_name}.{field_proto.name}: descriptor references "
                    f"{field_proto.type_name}, model references {expected}"
                )

    @staticmethod
    def _fail(message: str, cause: Optional[BaseException] = None) -> NoReturn:
        logger.error("Schema registration failed: %s", message)
        raise SchemaRegistrationError(message) from cause

    def is_registered(self, full_name: str) -> bool:
        """Return True if a message type with this full name is registered."""
        return full_name in self._classes

    def full_names(self) -> list[str]:
        """Return the full names of all registered message types, sorted."""
        return sorted(self._classes)

    def files(self) -> list[str]:
        """Return the names of all registered files, in registration order."""
        return list(self._files)

    def find_message_class(self, full_name: str) -> type[BaseMessage]:
        """Return the model class registered under a full name.

        Raises:
            KeyError: If no such type is registered
        """
        try:
            return self._classes[full_name]
        except KeyError:
            raise KeyError(f"Message type {full_name} is not registered") from None

    def find_descriptor(self, full_name: str) -> Descriptor:
        """Return the protobuf Descriptor registered under a full name.

        Raises:
            KeyError: If no such type is registered
        """
        self.find_message_class(full_name)
        return self._pool.FindMessageTypeByName(full_name)

    def dynamic_class(self, full_name: str) -> type[Any]:
        """Return a google.protobuf message class built from the registered descriptor.

        Useful for generic tooling (text format, JSON) and for checking wire
        compatibility with the reference protobuf runtime.

        Raises:
            KeyError: If no such type is registered
        """
        return message_factory.GetMessageClass(self.find_descriptor(full_name))

    def to_proto(self, message: BaseMessage) -> Message:
        """Copy a message into an instance of its registered dynamic class.

        Raises:
            EncodeError: If the message type is not registered or a field is invalid
        """
        full_name = type(message).full_name()
        if self._classes.get(full_name) is not type(message):
            raise EncodeError(f"Message type {full_name} is not registered")
        proto = self.dynamic_class(full_name)()
        fill_message(proto, message)
        return proto

    def encode(self, message: BaseMessage) -> bytes:
        """Encode a message whose type is registered here.

        Raises:
            EncodeError: If the message type is not registered or a field is invalid
        """
        proto = self.to_proto(message)
        try:
            return proto.SerializeToString()
        except ProtobufEncodeError as e:
            raise EncodeError(f"Failed to serialize {proto.DESCRIPTOR.full_name}: {e}") from e

    def decode(self, full_name: str, data: bytes) -> BaseMessage:
        """Decode bytes as the registered message type with the given full name.

        Raises:
            DecodeError: If the type is not registered or the data is invalid
        """
        message_class = self._classes.get(full_name)
        if message_class is None:
            raise DecodeError(
                f"Unknown message type: {full_name}. Registered types: {self.full_names()}"
            )

        proto = self.dynamic_class(full_name)()
        try:
            proto.ParseFromString(bytes(data))
        except ProtobufDecodeError as e:
            raise DecodeError(f"Error parsing {full_name}: {e}") from e
        return read_message(message_class, proto)


def build_registry(proto_files: Optional[Sequence[ProtoFile]] = None) -> SchemaRegistry:
    """Create a registry with the given files registered in order.

    Args:
        proto_files: Files to register, dependencies first; the subscription
            files when omitted

    Raises:
        SchemaRegistrationError: If any file fails to register
    """
    if proto_files is None:
        from ..subscription import SUBSCRIPTION_LIST_PROTO, SUBSCRIPTION_PROTO

        proto_files = (SUBSCRIPTION_PROTO, SUBSCRIPTION_LIST_PROTO)

    registry = SchemaRegistry()
    for proto_file in proto_files:
        registry.register(proto_file)
    return registry


_default_registry: Optional[SchemaRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> SchemaRegistry:
    """Return the process-wide registry, building it on the first call.

    Importing discoproto makes that first call, so an incompatible bundled
    descriptor fails at import rather than on first use.

    Concurrent first callers wait for a single build. Code that wants
    explicit control should call build_registry() and pass the result around.
    """
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = build_registry()
    return _default_registry
