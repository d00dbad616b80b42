"""Protobuf schema descriptors for discoproto.

This module provides serialized descriptor storage, .proto file objects,
descriptor/schema generation, and the schema registry.
"""

from __future__ import annotations

from .builder import to_file_descriptor, to_proto_schema
from .file import ProtoFile
from .raw import DescriptorRef, RawDescriptor
from .registry import SchemaRegistry, build_registry, default_registry

__all__ = [
    "RawDescriptor",
    "DescriptorRef",
    "ProtoFile",
    "SchemaRegistry",
    "build_registry",
    "default_registry",
    "to_file_descriptor",
    "to_proto_schema",
]
