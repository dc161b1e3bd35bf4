"""Binary encoder for fixed-layout records.

This module provides the encode() function that converts a record instance to
its fixed binary layout.
"""

from __future__ import annotations

from io import BytesIO

from pydantic import BaseModel

from .compiler import compile_codec
from .io import ByteSink


def encode(record: BaseModel) -> bytes:
    """Encode a record to bytes.

    Fields are written in declaration order with their resolved byte order.
    Padding fields are written as zero bytes whatever their value.

    Args:
        record: Record instance to encode

    Returns:
        Binary representation, exactly ``record_size(type(record))`` bytes long

    Raises:
        SchemaError: If the record class is invalid
        EncodeError: If a field value does not fit its primitive or an array
            has the wrong number of elements

    Examples:
        ```python
        from typing import Annotated
        from recordcodec import BaseRecord, U16, U32, encode

        class Header(BaseRecord):
            magic: Annotated[U32, "big-endian"]
            version: Annotated[U16, "little-endian"]

        data = encode(Header(magic=0xCAFEBABE, version=2))
        assert data == b"\\xca\\xfe\\xba\\xbe\\x02\\x00"
        ```
    """
    buf = BytesIO()
    encode_into(record, buf)
    return buf.getvalue()


def encode_into(record: BaseModel, sink: ByteSink) -> int:
    """Encode a record directly into a byte sink.

    Args:
        record: Record instance to encode
        sink: Object with a ``write(data)`` method

    Returns:
        Number of bytes written

    Raises:
        SchemaError: If the record class is invalid
        EncodeError: If a field value cannot be encoded
        SinkError: If the sink rejects a write
    """
    codec = compile_codec(type(record))
    codec.encode(record, sink)
    return codec.size
