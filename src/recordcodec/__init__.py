"""recordcodec: Fixed-Layout Binary Record Codec

A Python library for reading and writing fixed-layout binary records. A record
is declared once as a Pydantic model; its fields, in declaration order, are the
byte layout. Per-field directives select byte order and padding, and the codec
for each record class is compiled once and reused.

Key Features:
- Pydantic-based record modeling
- Explicit little/big/native byte order per field
- Nested records and fixed-size arrays
- Padding fields that skip bytes and decode to defaults
- No implicit alignment: the layout is exactly what is declared

Quick Start:
    >>> from typing import Annotated
    >>> from recordcodec import BaseRecord, Pad, U8, U32, I128, encode, decode
    >>>
    >>> class Sample(BaseRecord):
    ...     f1: Annotated[U32, "big-endian"]
    ...     f2: Annotated[I128, "native-endian"]
    ...     f3: Annotated[U8, "big-endian"]
    ...     reserved: Annotated[Pad, "pad(bytes = 11)"] = Pad()
    >>>
    >>> record = Sample(f1=510745010, f2=-1, f3=100)
    >>> data = encode(record)
    >>> len(data)
    32
    >>> decode(Sample, data) == record
    True
"""

from __future__ import annotations

from .codec import (
    BigEndian,
    ByteOrder,
    LittleEndian,
    NativeEndian,
    Padding,
    RecordCodec,
    RecordReader,
    RecordSchema,
    RecordWriter,
    compile_codec,
    decode,
    encode,
    encode_into,
)
from .codec.primitives import NATIVE_BYTE_ORDER
from .exceptions import (
    DecodeError,
    DirectiveError,
    EncodeError,
    RecordCodecError,
    SchemaError,
    ShortReadError,
    SinkError,
)
from .models import (
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
    BaseRecord,
    Pad,
)
from .utils import field_layout, field_offsets, field_sizes, record_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "BaseRecord",
    "encode",
    "encode_into",
    "decode",
    "compile_codec",
    "RecordCodec",
    "RecordSchema",
    # Stream adapters
    "RecordReader",
    "RecordWriter",
    # Field types
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
    "Array",
    "Pad",
    # Directives
    "ByteOrder",
    "LittleEndian",
    "BigEndian",
    "NativeEndian",
    "Padding",
    "NATIVE_BYTE_ORDER",
    # Exceptions
    "RecordCodecError",
    "SchemaError",
    "DirectiveError",
    "EncodeError",
    "SinkError",
    "DecodeError",
    "ShortReadError",
    # Sizing
    "record_size",
    "field_sizes",
    "field_offsets",
    "field_layout",
    # Version
    "__version__",
]
