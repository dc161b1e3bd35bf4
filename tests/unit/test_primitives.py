"""Unit tests for fixed-width primitive codecs."""

from __future__ import annotations

import io
import struct
import sys

import pytest

from recordcodec import U32, EncodeError, ShortReadError
from recordcodec.codec.primitives import (
    NATIVE_BYTE_ORDER,
    PRIMITIVES,
    Primitive,
    f32,
    f64,
    i8,
    i16,
    i128,
    primitive_of,
    u8,
    u16,
    u32,
    u64,
    u128,
)


class TestRead:
    """Test reading primitives from a byte source."""

    def test_read_le(self) -> None:
        assert u32.read_le(io.BytesIO(bytes([87, 0, 0, 0]))) == 87

    def test_read_be(self) -> None:
        assert u32.read_be(io.BytesIO(bytes([0, 0, 0, 226]))) == 226

    def test_read_signed(self) -> None:
        assert i16.read_le(io.BytesIO(bytes([34, 138]))) == -30174
        assert i8.read_be(io.BytesIO(b"\xff")) == -1

    def test_read_128_bit(self) -> None:
        data = bytes(range(16))
        assert u128.read_be(io.BytesIO(data)) == int.from_bytes(data, "big")
        assert i128.read_le(io.BytesIO(b"\xff" * 16)) == -1

    def test_read_floats(self) -> None:
        assert f32.read_le(io.BytesIO(struct.pack("<f", 1.5))) == 1.5
        assert f64.read_be(io.BytesIO(b"\x3f\xf0" + bytes(6))) == 1.0

    def test_read_consumes_exactly_width(self) -> None:
        source = io.BytesIO(b"\x01\x02\x03")
        assert u16.read_be(source) == 0x0102
        assert source.read() == b"\x03"

    def test_short_read(self) -> None:
        with pytest.raises(ShortReadError) as exc_info:
            u64.read_le(io.BytesIO(bytes(7)))

        assert exc_info.value.expected == 8
        assert exc_info.value.received == 7


class TestWrite:
    """Test writing primitives to a byte sink."""

    def test_write_le_be(self) -> None:
        sink = io.BytesIO()
        u16.write_le(513, sink)
        u16.write_be(513, sink)
        assert sink.getvalue() == b"\x01\x02\x02\x01"

    def test_to_bytes_signed(self) -> None:
        assert i16.to_bytes(-30174, "little") == bytes([34, 138])

    def test_to_bytes_max_values(self) -> None:
        assert u128.to_bytes((1 << 128) - 1, "big") == b"\xff" * 16
        assert i128.to_bytes(-(1 << 127), "big") == b"\x80" + bytes(15)

    def test_out_of_range(self) -> None:
        with pytest.raises(EncodeError, match="out of range for u8"):
            u8.to_bytes(256, "little")

        with pytest.raises(EncodeError, match="out of range for i8"):
            i8.to_bytes(-129, "little")

        with pytest.raises(EncodeError, match="out of range for u32"):
            u32.to_bytes(-1, "big")

    def test_wrong_type(self) -> None:
        with pytest.raises(EncodeError, match="expected int"):
            u8.to_bytes("a", "little")

        with pytest.raises(EncodeError, match="expected int"):
            u8.to_bytes(1.5, "little")

    def test_float_overflow(self) -> None:
        with pytest.raises(EncodeError, match="f32"):
            f32.to_bytes(1e300, "little")


class TestNativeOrder:
    """Test native byte order resolution."""

    def test_native_order_matches_platform(self) -> None:
        assert NATIVE_BYTE_ORDER == sys.byteorder

    def test_native_alias_is_fixed(self) -> None:
        if sys.byteorder == "little":
            assert Primitive.read_native is Primitive.read_le
            assert Primitive.write_native is Primitive.write_le
        else:
            assert Primitive.read_native is Primitive.read_be
            assert Primitive.write_native is Primitive.write_be

    def test_native_roundtrip(self) -> None:
        sink = io.BytesIO()
        u32.write_native(0x01020304, sink)
        assert sink.getvalue() == (0x01020304).to_bytes(4, sys.byteorder)
        assert u32.read_native(io.BytesIO(sink.getvalue())) == 0x01020304


class TestPrimitiveOf:
    """Test primitive lookup."""

    def test_lookup(self) -> None:
        assert primitive_of(u32) is u32
        assert primitive_of(U32) is u32
        assert primitive_of("i128") is i128

    def test_not_a_primitive(self) -> None:
        with pytest.raises(TypeError):
            primitive_of(int)

    def test_widths(self) -> None:
        widths = {name: p.width for name, p in PRIMITIVES.items()}
        assert widths == {
            "u8": 1,
            "u16": 2,
            "u32": 4,
            "u64": 8,
            "u128": 16,
            "i8": 1,
            "i16": 2,
            "i32": 4,
            "i64": 8,
            "i128": 16,
            "f32": 4,
            "f64": 8,
        }
