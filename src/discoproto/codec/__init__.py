"""Protobuf binary codec for discoproto.

This module provides encoding and decoding between message models and the
protobuf wire format. Bytes are read and written by google.protobuf messages
built from the registered descriptors; the field tags declared on each model
map its attributes onto those messages.
"""

from __future__ import annotations

from .decoder import decode
from .encoder import encode
from .schema import FieldSchema, MessageSchema
from .text import to_text

__all__ = [
    "encode",
    "decode",
    "to_text",
    "MessageSchema",
    "FieldSchema",
]
