"""FileDescriptorProto and .proto schema generation.

This module builds protobuf file descriptors from message models and renders
any file descriptor back to .proto source text.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from google.protobuf import descriptor_pb2

from ..codec.schema import FieldSchema, MessageSchema
from ..exceptions import SchemaError
from ..models.base import BaseMessage

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto

PROTO_TYPES: dict[str, int] = {
    "string": FieldDescriptorProto.TYPE_STRING,
    "bytes": FieldDescriptorProto.TYPE_BYTES,
    "bool": FieldDescriptorProto.TYPE_BOOL,
    "int32": FieldDescriptorProto.TYPE_INT32,
    "int64": FieldDescriptorProto.TYPE_INT64,
    "uint32": FieldDescriptorProto.TYPE_UINT32,
    "uint64": FieldDescriptorProto.TYPE_UINT64,
    "message": FieldDescriptorProto.TYPE_MESSAGE,
}

PROTO_TYPE_NAMES: dict[int, str] = {number: name for name, number in PROTO_TYPES.items()}


def to_file_descriptor(
    messages: Sequence[type[BaseMessage]],
    *,
    name: str,
    package: str,
    dependencies: Sequence[str] = (),
    options: Mapping[str, Any] | None = None,
    syntax: str = "proto3",
) -> descriptor_pb2.FileDescriptorProto:
    """Build a FileDescriptorProto declaring the given message models.

    The result matches what protoc would emit for an equivalent .proto file:
    fields carry their label, type, fully-qualified type name and JSON name.

    Args:
        messages: Message classes, in declaration order
        name: File path, e.g. "wso2/discovery/subscription/subscription.proto"
        package: Protobuf package
        dependencies: File paths this file imports
        options: FileOptions fields to set (java_package, go_package, ...)
        syntax: Protobuf syntax version ("proto2" or "proto3")

    Returns:
        FileDescriptorProto ready to be serialized

    Raises:
        SchemaError: If a message is in another package or its schema is invalid

    Example:
        >>> file_proto = to_file_descriptor(
        ...     [Subscription],
        ...     name="wso2/discovery/subscription/subscription.proto",
        ...     package="wso2.discovery.subscription",
        ... )
        >>> raw = RawDescriptor(file_proto.SerializeToString())
    """
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = name
    file_proto.package = package
    file_proto.dependency.extend(dependencies)

    for message_class in messages:
        if message_class.proto_package != package:
            raise SchemaError(
                f"{message_class.__name__} is in package {message_class.proto_package!r}, "
                f"not {package!r}"
            )
        message_proto = file_proto.message_type.add()
        message_proto.name = message_class.proto_name or message_class.__name__

        for field in MessageSchema.from_model(message_class).fields:
            _add_field(message_proto, field)

    for option_name, value in (options or {}).items():
        setattr(file_proto.options, option_name, value)

    # protoc leaves syntax unset for proto2
    if syntax != "proto2":
        file_proto.syntax = syntax

    return file_proto


def _add_field(message_proto: descriptor_pb2.DescriptorProto, field: FieldSchema) -> None:
    field_proto = message_proto.field.add()
    field_proto.name = field.proto_name
    field_proto.number = field.number
    field_proto.label = (
        FieldDescriptorProto.LABEL_REPEATED if field.repeated else FieldDescriptorProto.LABEL_OPTIONAL
    )
    field_proto.type = PROTO_TYPES[field.proto_type]  # type: ignore[assignment]
    if field.is_message:
        field_proto.type_name = "." + field.message_type.full_name()  # type: ignore[attr-defined]
    field_proto.json_name = json_name(field.proto_name)


def json_name(proto_name: str) -> str:
    """Return protoc's default JSON name: underscores dropped, next letter uppercased."""
    result = []
    capitalize_next = False
    for char in proto_name:
        if char == "_":
            capitalize_next = True
        elif capitalize_next:
            result.append(char.upper())
            capitalize_next = False
        else:
            result.append(char)
    return "".join(result)


def to_proto_schema(file_proto: descriptor_pb2.FileDescriptorProto) -> str:
    """Render a FileDescriptorProto as .proto source text.

    Args:
        file_proto: File descriptor to render

    Returns:
        .proto schema as a string

    Raises:
        SchemaError: If a field uses a type this package does not model

    Example:
        >>> print(to_proto_schema(SUBSCRIPTION_LIST_PROTO.file_descriptor_proto()))
        syntax = "proto3";
        <BLANKLINE>
        package wso2.discovery.subscription;
        ...
    """
    lines = [f'syntax = "{file_proto.syntax or "proto2"}";', ""]

    if file_proto.package:
        lines.append(f"package {file_proto.package};")
        lines.append("")

    if file_proto.dependency:
        for dependency in file_proto.dependency:
            lines.append(f'import "{dependency}";')
        lines.append("")

    options = file_proto.options.ListFields()
    if options:
        for option_field, value in options:
            lines.append(f"option {option_field.name} = {_format_option(value)};")
        lines.append("")

    for message_proto in file_proto.message_type:
        lines.append(f"message {message_proto.name} {{")
        for field_proto in message_proto.field:
            label = "repeated " if field_proto.label == FieldDescriptorProto.LABEL_REPEATED else ""
            type_name = _field_type_name(field_proto, file_proto.package)
            lines.append(f"    {label}{type_name} {field_proto.name} = {field_proto.number};")
        lines.append("}")
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def _field_type_name(field_proto: FieldDescriptorProto, package: str) -> str:
    if field_proto.type == FieldDescriptorProto.TYPE_MESSAGE:
        type_name = field_proto.type_name.lstrip(".")
        if package and type_name.startswith(package + "."):
            type_name = type_name[len(package) + 1 :]
        return type_name

    try:
        return PROTO_TYPE_NAMES[field_proto.type]
    except KeyError as err:
        raise SchemaError(
            f"Field {field_proto.name}: unsupported descriptor type {field_proto.type}"
        ) from err


def _format_option(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)
