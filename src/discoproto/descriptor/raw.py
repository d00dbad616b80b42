"""Serialized schema descriptors with lazily computed, cached forms.

A RawDescriptor holds the bytes of a serialized FileDescriptorProto, either
plain or gzip-compressed. The other form is computed on first access, exactly
once even under concurrent first callers, and cached for the life of the
object.
"""

from __future__ import annotations

import gzip
import threading
import zlib
from typing import NamedTuple, Optional

from ..exceptions import SchemaRegistrationError


class DescriptorRef(NamedTuple):
    """Legacy descriptor handle returned by BaseMessage.descriptor().

    Attributes:
        full_name: Namespace-qualified message type name
        file_descriptor: gzip-compressed FileDescriptorProto of the declaring file
        path: Index path of the message inside that file
    """

    full_name: str
    file_descriptor: bytes
    path: tuple[int, ...]


class RawDescriptor:
    """Serialized FileDescriptorProto bytes.

    Example:
        >>> raw = RawDescriptor(file_proto.SerializeToString())
        >>> raw.serialized   # the plain bytes
        >>> raw.compressed   # gzip-compressed on first access, then cached
    """

    def __init__(self, data: bytes, *, compressed: bool = False) -> None:
        """Wrap descriptor bytes.

        Args:
            data: Serialized FileDescriptorProto bytes
            compressed: True if ``data`` is gzip-compressed
        """
        self._lock = threading.Lock()
        self._serialized: Optional[bytes] = None
        self._compressed: Optional[bytes] = None
        if compressed:
            self._compressed = bytes(data)
        else:
            self._serialized = bytes(data)

    @property
    def serialized(self) -> bytes:
        """Plain serialized bytes, decompressed once on first access.

        Raises:
            SchemaRegistrationError: If the compressed bytes are corrupt
        """
        if self._serialized is None:
            with self._lock:
                if self._serialized is None:
                    if self._compressed is None:
                        raise SchemaRegistrationError("Descriptor holds no bytes")
                    try:
                        self._serialized = gzip.decompress(self._compressed)
                    except (OSError, EOFError, zlib.error) as e:
                        raise SchemaRegistrationError(
                            f"Corrupt compressed descriptor: {e}"
                        ) from e
        return self._serialized

    @property
    def compressed(self) -> bytes:
        """gzip-compressed bytes, compressed once on first access."""
        if self._compressed is None:
            with self._lock:
                if self._compressed is None:
                    if self._serialized is None:
                        raise SchemaRegistrationError("Descriptor holds no bytes")
                    # mtime=0 keeps the output identical across runs
                    self._compressed = gzip.compress(self._serialized, mtime=0)
        return self._compressed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawDescriptor):
            return NotImplemented
        return self.serialized == other.serialized

    def __hash__(self) -> int:
        return hash(self.serialized)

    def __repr__(self) -> str:
        return f"RawDescriptor({len(self.serialized)} bytes)"
