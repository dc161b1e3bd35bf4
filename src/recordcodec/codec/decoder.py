"""Binary decoder for fixed-layout records.

This module provides the decode() function that reads binary data back into a
record instance.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any, TypeVar, Union

from pydantic import BaseModel

from .compiler import compile_codec
from .io import ByteSource

T = TypeVar("T", bound=BaseModel)

BytesLike = Union[bytes, bytearray, memoryview]


def decode(record_class: type[T], data: Union[BytesLike, ByteSource]) -> T:
    """Decode binary data to a record.

    The record's codec is compiled (or fetched from cache) before any byte is
    read, so schema errors never leave a source partially consumed. Fields are
    read in declaration order; padding fields are skipped and set to their
    type's default.

    Args:
        record_class: Record class to decode to
        data: Bytes-like object, or a byte source with a ``read(n)`` method.
            Bytes beyond the end of the record are left unread.

    Returns:
        Decoded record instance

    Raises:
        SchemaError: If the record class is invalid
        ShortReadError: If the data ends before the record is complete
        DecodeError: If the byte source fails

    Examples:
        ```python
        from typing import Annotated
        from recordcodec import BaseRecord, U16, U32, decode

        class Header(BaseRecord):
            magic: Annotated[U32, "big-endian"]
            version: Annotated[U16, "little-endian"]

        header = decode(Header, b"\\xca\\xfe\\xba\\xbe\\x02\\x00")
        assert header.magic == 0xCAFEBABE

        with open("capture.bin", "rb") as f:
            header = decode(Header, f)
        ```
    """
    codec = compile_codec(record_class)
    return codec.decode(_as_source(data))


def _as_source(data: Any) -> ByteSource:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return BytesIO(bytes(data))
    if not callable(getattr(data, "read", None)):
        raise TypeError(
            f"decode() needs bytes or a byte source with read(), got {type(data).__name__}"
        )
    return data
