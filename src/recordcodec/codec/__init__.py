"""Fixed-layout binary codec for recordcodec.

This module provides schema compilation, encoding and decoding of records
with explicit byte order and padding.
"""

from __future__ import annotations

from .compiler import RecordCodec, compile_codec
from .decoder import decode
from .directives import BigEndian, ByteOrder, FieldDirective, LittleEndian, NativeEndian, Padding
from .encoder import encode, encode_into
from .schema import FieldSpec, RecordSchema
from .stream import RecordReader, RecordWriter

__all__ = [
    "encode",
    "encode_into",
    "decode",
    "compile_codec",
    "RecordCodec",
    "RecordSchema",
    "FieldSpec",
    "FieldDirective",
    "ByteOrder",
    "LittleEndian",
    "BigEndian",
    "NativeEndian",
    "Padding",
    "RecordReader",
    "RecordWriter",
]
