"""Reader and writer adapters over byte streams.

RecordReader and RecordWriter let a caller read and write records and single
primitives from any byte source or sink without naming the compiled codec.
They add no buffering and no retries: every call goes straight to the
underlying stream.

Example:
    >>> import io
    >>> reader = RecordReader(io.BytesIO(b"\\x00\\x00\\x00\\xe2\\x57\\x00"))
    >>> reader.read_be(U32)
    226
    >>> reader.read_le(U16)
    87
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from .compiler import compile_codec
from .io import ByteSink, ByteSource
from .primitives import Number, primitive_of

T = TypeVar("T", bound=BaseModel)


class RecordReader:
    """Reads records and primitives from a byte source."""

    def __init__(self, source: ByteSource) -> None:
        self.source = source

    def read_as(self, record_class: type[T]) -> T:
        """Decode the next ``record_class`` record from the source."""
        return compile_codec(record_class).decode(self.source)

    def read_le(self, kind: Any) -> Number:
        """Read one little-endian primitive (``u32`` or ``U32``)."""
        return primitive_of(kind).read_le(self.source)

    def read_be(self, kind: Any) -> Number:
        """Read one big-endian primitive."""
        return primitive_of(kind).read_be(self.source)

    def read_native(self, kind: Any) -> Number:
        """Read one primitive in native byte order."""
        return primitive_of(kind).read_native(self.source)


class RecordWriter:
    """Writes records and primitives to a byte sink."""

    def __init__(self, sink: ByteSink) -> None:
        self.sink = sink

    def write_as(self, record: BaseModel) -> None:
        """Encode ``record`` into the sink."""
        compile_codec(type(record)).encode(record, self.sink)

    def write_le(self, kind: Any, value: Number) -> None:
        primitive_of(kind).write_le(value, self.sink)

    def write_be(self, kind: Any, value: Number) -> None:
        primitive_of(kind).write_be(value, self.sink)

    def write_native(self, kind: Any, value: Number) -> None:
        primitive_of(kind).write_native(value, self.sink)
