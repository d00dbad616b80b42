"""Pydantic message modeling for discoproto.

This module provides the BaseMessage class and field helpers for declaring
protobuf messages as Pydantic models.
"""

from __future__ import annotations

from .base import BaseMessage
from .fields import ProtoField, RepeatedField

__all__ = [
    "BaseMessage",
    "ProtoField",
    "RepeatedField",
]
