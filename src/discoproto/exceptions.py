"""Exception hierarchy for discoproto.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from DiscoprotoError for easy catching of any discoproto-specific error.
"""

from __future__ import annotations


class DiscoprotoError(Exception):
    """Base exception for all discoproto errors."""

    pass


class SchemaError(DiscoprotoError):
    """Raised when a message schema is invalid.

    Examples:
        - Duplicate field numbers on one message
        - Field number outside 1..2^29-1 or in the reserved 19000-19999 range
        - Unsupported field annotation or proto type
    """

    pass


class SchemaRegistrationError(SchemaError):
    """Raised when a descriptor cannot be registered.

    Registration errors are fatal and are expected to abort startup.

    Examples:
        - A dependency file has not been registered first
        - A different descriptor is already registered under the same file name
        - Model fields disagree with the descriptor (number, type, label)
    """

    pass


class EncodeError(DiscoprotoError):
    """Raised when encoding a message fails.

    Examples:
        - None element inside a repeated message field
        - Integer value outside the range of its proto type
        - Field value of the wrong Python type
    """

    pass


class DecodeError(DiscoprotoError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (varint or length-delimited value cut short)
        - Message type not registered
        - Invalid field number or wire type
        - Invalid UTF-8 in a string field
    """

    pass
