#!/usr/bin/env python3
"""Basic usage example for recordcodec.

This example demonstrates:
1. Declaring a fixed-layout record with Pydantic
2. Encoding it to bytes
3. Decoding it back, from bytes and from a stream
4. Inspecting the byte layout
"""

from __future__ import annotations

import io
from typing import Annotated

from recordcodec import (
    I16,
    U8,
    U32,
    Array,
    BaseRecord,
    Pad,
    RecordReader,
    decode,
    encode,
    field_layout,
    record_size,
)


class Position(BaseRecord):
    """Little-endian position fix."""

    x: Annotated[I16, "little-endian"]
    y: Annotated[I16, "little-endian"]


class Telemetry(BaseRecord):
    """Telemetry frame with a big-endian header and a reserved area."""

    sequence: Annotated[U32, "big-endian"]
    flags: U8
    reserved: Annotated[Pad, "pad(bytes = 3)"] = Pad()
    position: Position
    samples: Annotated[Array(I16, 4), "big-endian"]


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("recordcodec Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating a telemetry record...")
    record = Telemetry(
        sequence=1024,
        flags=0b101,
        position=Position(x=-120, y=340),
        samples=[10, -10, 250, -250],
    )
    print(f"   {record!r}")
    print()

    print("2. Byte layout...")
    for item in field_layout(Telemetry):
        print(f"   {item.offset:>3}  {item.name:<10} {item.size:>2} bytes  {item.operation}")
    print(f"   Total: {record_size(Telemetry)} bytes")
    print()

    print("3. Encoding...")
    data = encode(record)
    print(f"   Hex: {data.hex()}")
    print()

    print("4. Decoding...")
    decoded = decode(Telemetry, data)
    print(f"   Round-trip {'matches' if decoded == record else 'does NOT match'}")
    print()

    print("5. Reading two records from one stream...")
    reader = RecordReader(io.BytesIO(data + data))
    first, second = reader.read_as(Telemetry), reader.read_as(Telemetry)
    print(f"   Sequences: {first.sequence}, {second.sequence}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
