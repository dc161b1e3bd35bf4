"""Byte source and sink primitives.

Generated codecs only ever ask a source to "read exactly N bytes or fail" and
a sink to "write exactly these bytes or fail". Any object with a ``read(n)``
method (``io.BytesIO``, a file opened in ``"rb"`` mode, ``socket.makefile("rb")``)
is a source; any object with a ``write(data)`` method is a sink.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..exceptions import DecodeError, ShortReadError, SinkError


@runtime_checkable
class ByteSource(Protocol):
    """Anything that can hand out bytes on request."""

    def read(self, size: int = -1, /) -> Optional[bytes]: ...


@runtime_checkable
class ByteSink(Protocol):
    """Anything that accepts bytes."""

    def write(self, data: bytes, /) -> Optional[int]: ...


def read_exact(source: ByteSource, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``source``.

    Partial reads are retried until the source reports end of stream
    (an empty read).

    Args:
        source: Byte source to read from
        size: Number of bytes to read

    Returns:
        Exactly ``size`` bytes

    Raises:
        ShortReadError: If the source ends before ``size`` bytes were read
        DecodeError: If the source raises an I/O error
    """
    if size == 0:
        return b""

    buf = bytearray()
    while len(buf) < size:
        try:
            chunk = source.read(size - len(buf))
        except OSError as e:
            raise DecodeError(f"Byte source failed: {e}") from e
        if not chunk:
            raise ShortReadError(size, len(buf))
        buf += chunk
    return bytes(buf)


def write_all(sink: ByteSink, data: bytes) -> int:
    """Write all of ``data`` to ``sink``.

    Partial writes are retried with the remaining bytes. A sink whose
    ``write`` returns ``None`` is taken to have accepted everything.

    Args:
        sink: Byte sink to write to
        data: Bytes to write

    Returns:
        Number of bytes written (always ``len(data)``)

    Raises:
        SinkError: If the sink raises, is closed, or accepts no bytes
    """
    remaining = bytes(data)
    while remaining:
        try:
            written = sink.write(remaining)
        except (OSError, ValueError) as e:
            raise SinkError(f"Byte sink rejected write: {e}") from e
        if written is None:
            break
        if written <= 0:
            raise SinkError(f"Byte sink accepted 0 of {len(remaining)} bytes")
        remaining = remaining[written:]
    return len(data)
