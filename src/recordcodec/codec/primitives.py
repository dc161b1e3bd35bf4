"""Fixed-width primitive codecs.

Each ``Primitive`` knows how to turn exactly ``width`` bytes into a Python
``int`` or ``float`` and back, in little-endian, big-endian or native byte
order. Native order is resolved once, when this module is imported, from
``sys.byteorder`` and never changes afterwards.

Example:
    >>> import io
    >>> u32.read_be(io.BytesIO(b"\\x00\\x00\\x00\\xe2"))
    226
    >>> u16.to_bytes(513, "little")
    b'\\x01\\x02'
"""

from __future__ import annotations

import operator
import struct
import sys
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from ..exceptions import EncodeError
from .io import ByteSink, ByteSource, read_exact, write_all

ByteOrderName = Literal["little", "big"]

NATIVE_BYTE_ORDER: ByteOrderName = "little" if sys.byteorder == "little" else "big"

Number = Union[int, float]


@dataclass(frozen=True, repr=False)
class Primitive:
    """A fixed-width scalar kind.

    Attributes:
        name: Short name (``u32``, ``i128``, ``f64``)
        width: Size in bytes
        kind: ``"uint"``, ``"int"`` or ``"float"``
    """

    name: str
    width: int
    kind: Literal["uint", "int", "float"]

    @property
    def signed(self) -> bool:
        return self.kind != "uint"

    @property
    def default(self) -> Number:
        """Default value of this kind (zero)."""
        return 0.0 if self.kind == "float" else 0

    @property
    def bounds(self) -> tuple[int, int] | None:
        """Inclusive (min, max) for integer kinds, None for floats."""
        if self.kind == "float":
            return None
        bits = self.width * 8
        if self.signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1

    def from_bytes(self, data: bytes, byteorder: ByteOrderName) -> Number:
        """Decode exactly ``width`` bytes."""
        if len(data) != self.width:
            raise ValueError(f"{self.name} needs {self.width} bytes, got {len(data)}")
        if self.kind == "float":
            return struct.unpack(self._struct_format(byteorder), data)[0]
        return int.from_bytes(data, byteorder, signed=self.signed)

    def to_bytes(self, value: Any, byteorder: ByteOrderName) -> bytes:
        """Encode ``value`` into exactly ``width`` bytes.

        Raises:
            EncodeError: If the value has the wrong type or does not fit
        """
        if self.kind == "float":
            try:
                return struct.pack(self._struct_format(byteorder), value)
            except (struct.error, OverflowError) as e:
                raise EncodeError(f"cannot encode {value!r} as {self.name}: {e}") from e

        try:
            number = operator.index(value)
        except TypeError as e:
            raise EncodeError(
                f"expected int for {self.name}, got {type(value).__name__}"
            ) from e
        try:
            return number.to_bytes(self.width, byteorder, signed=self.signed)
        except OverflowError as e:
            low, high = self.bounds  # type: ignore[misc]
            raise EncodeError(
                f"value {number} out of range for {self.name} [{low}, {high}]"
            ) from e

    def _struct_format(self, byteorder: ByteOrderName) -> str:
        prefix = "<" if byteorder == "little" else ">"
        return prefix + ("f" if self.width == 4 else "d")

    # Stream-facing reads

    def read_le(self, source: ByteSource) -> Number:
        """Read one value in little-endian order."""
        return self.from_bytes(read_exact(source, self.width), "little")

    def read_be(self, source: ByteSource) -> Number:
        """Read one value in big-endian order."""
        return self.from_bytes(read_exact(source, self.width), "big")

    # Stream-facing writes

    def write_le(self, value: Any, sink: ByteSink) -> None:
        """Write one value in little-endian order."""
        write_all(sink, self.to_bytes(value, "little"))

    def write_be(self, value: Any, sink: ByteSink) -> None:
        """Write one value in big-endian order."""
        write_all(sink, self.to_bytes(value, "big"))

    if NATIVE_BYTE_ORDER == "little":
        read_native = read_le
        write_native = write_le
    else:
        read_native = read_be
        write_native = write_be

    def __repr__(self) -> str:
        return self.name


u8 = Primitive("u8", 1, "uint")
u16 = Primitive("u16", 2, "uint")
u32 = Primitive("u32", 4, "uint")
u64 = Primitive("u64", 8, "uint")
u128 = Primitive("u128", 16, "uint")
i8 = Primitive("i8", 1, "int")
i16 = Primitive("i16", 2, "int")
i32 = Primitive("i32", 4, "int")
i64 = Primitive("i64", 8, "int")
i128 = Primitive("i128", 16, "int")
f32 = Primitive("f32", 4, "float")
f64 = Primitive("f64", 8, "float")

PRIMITIVES: dict[str, Primitive] = {
    p.name: p for p in (u8, u16, u32, u64, u128, i8, i16, i32, i64, i128, f32, f64)
}


def primitive_of(kind: Any) -> Primitive:
    """Resolve a primitive from a ``Primitive`` or an annotated scalar alias.

    Accepts ``u32`` itself, a scalar alias such as ``U32``
    (``Annotated[int, u32, ...]``), or a primitive name such as ``"u32"``.

    Raises:
        TypeError: If ``kind`` does not name a primitive
    """
    if isinstance(kind, Primitive):
        return kind
    if isinstance(kind, str) and kind in PRIMITIVES:
        return PRIMITIVES[kind]
    if get_origin(kind) is Annotated:
        for meta in get_args(kind)[1:]:
            if isinstance(meta, Primitive):
                return meta
    raise TypeError(f"{kind!r} is not a primitive kind")
