"""Field type helpers and utilities.

This module provides the scalar type aliases, fixed-size arrays and the
padding marker type used to declare record fields.

Scalar aliases are ``Annotated`` types that carry both the primitive kind
(used by the codec) and Pydantic ``ge``/``le`` bounds (used when a record is
constructed), so ``U8`` only accepts 0..255. ``F32`` rounds values to single
precision on validation, so a record holds exactly what it decodes back to.
"""

from __future__ import annotations

import operator
import struct
from typing import Annotated, Any, List

from pydantic import AfterValidator, Field

from ..codec import primitives
from ..codec.schema import ArrayLength
from .base import BaseRecord


def _int_alias(primitive: primitives.Primitive) -> Any:
    low, high = primitive.bounds  # type: ignore[misc]
    return Annotated[int, primitive, Field(ge=low, le=high)]


def _to_single_precision(value: float) -> float:
    # Stored values are the ones an f32 field decodes back to
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as e:
        raise ValueError(f"{value!r} is out of range for f32") from e


U8 = _int_alias(primitives.u8)
U16 = _int_alias(primitives.u16)
U32 = _int_alias(primitives.u32)
U64 = _int_alias(primitives.u64)
U128 = _int_alias(primitives.u128)
I8 = _int_alias(primitives.i8)
I16 = _int_alias(primitives.i16)
I32 = _int_alias(primitives.i32)
I64 = _int_alias(primitives.i64)
I128 = _int_alias(primitives.i128)
F32 = Annotated[float, primitives.f32, AfterValidator(_to_single_precision)]
F64 = Annotated[float, primitives.f64]


def Array(element: Any, length: int) -> Any:
    """Create a fixed-size homogeneous array type.

    ``length`` may be a literal or any named integer constant (an ``IntEnum``
    member, a module-level constant); it is resolved immediately.

    Args:
        element: Element type (a scalar alias such as ``U16`` or a record class)
        length: Number of elements

    Returns:
        An ``Annotated[list[element], ...]`` type usable as a field annotation.

    Example:
        >>> class Message(BaseRecord):
        ...     samples: Array(I16, 4)
        ...     points: Annotated[Array(U32, 2), "big-endian"]
    """
    count = operator.index(length)
    if count < 0:
        raise ValueError(f"array length must be non-negative, got {count}")
    return Annotated[List[element], ArrayLength(count), Field(min_length=count, max_length=count)]


class Pad(BaseRecord):
    """Zero-size padding marker type.

    A ``Pad`` field occupies no bytes on its own; combine it with
    ``pad(bytes = N)`` to skip ``N`` bytes of the stream.

    Example:
        >>> class Message(BaseRecord):
        ...     value: U32
        ...     reserved: Annotated[Pad, "pad(bytes = 12)"] = Pad()
    """
