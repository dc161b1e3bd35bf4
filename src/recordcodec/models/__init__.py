"""Pydantic record modeling for recordcodec.

This module provides the BaseRecord class and field types for declaring
fixed-layout binary records.
"""

from __future__ import annotations

from .base import BaseRecord
from .fields import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    Array,
    Pad,
)

__all__ = [
    "BaseRecord",
    "Array",
    "Pad",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "F32",
    "F64",
]
