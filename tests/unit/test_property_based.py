"""Property-based tests using hypothesis."""

from __future__ import annotations

import io
import math
import struct
from typing import Annotated

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from recordcodec import (
    F32,
    F64,
    I8,
    I64,
    I128,
    U16,
    U32,
    U128,
    Array,
    BaseRecord,
    Pad,
    RecordReader,
    RecordWriter,
    decode,
    encode,
    record_size,
)
from recordcodec.codec.directives import resolve_directive


class Mixed(BaseRecord):
    """Record covering every byte order and several widths."""

    small: I8
    count: Annotated[U16, "big-endian"]
    offset: Annotated[I64, "little-endian"]
    wide: Annotated[U128, "native-endian"]
    signed_wide: Annotated[I128, "big-endian"]
    reserved: Annotated[Pad, "pad(bytes = 3)"] = Pad()
    window: Annotated[Array(U32, 4), "little-endian"]


class Measurements(BaseRecord):
    gain: Annotated[F32, "big-endian"]
    level: Annotated[F64, "little-endian"]


F32_MAX = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]


def int_range(bits: int, signed: bool) -> st.SearchStrategy[int]:
    if signed:
        return st.integers(min_value=-(1 << (bits - 1)), max_value=(1 << (bits - 1)) - 1)
    return st.integers(min_value=0, max_value=(1 << bits) - 1)


mixed_records = st.builds(
    Mixed,
    small=int_range(8, True),
    count=int_range(16, False),
    offset=int_range(64, True),
    wide=int_range(128, False),
    signed_wide=int_range(128, True),
    window=st.lists(int_range(32, False), min_size=4, max_size=4),
)


class TestCodecProperties:
    """Property-based tests for the codec."""

    @given(record=mixed_records)
    def test_encode_decode_roundtrip(self, record: Mixed) -> None:
        """Decoding an encoded record gives back the record."""
        assert decode(Mixed, encode(record)) == record

    @given(record=mixed_records)
    def test_encoded_length_is_record_size(self, record: Mixed) -> None:
        assert len(encode(record)) == record_size(Mixed) == 1 + 2 + 8 + 16 + 16 + 3 + 16

    @given(record=mixed_records)
    def test_encode_deterministic(self, record: Mixed) -> None:
        assert encode(record) == encode(record.model_copy())

    @given(data=st.binary(min_size=62, max_size=80))
    def test_decode_encode_zeroes_only_padding(self, data: bytes) -> None:
        """Re-encoding decoded bytes reproduces them, except for the padding."""
        reencoded = encode(decode(Mixed, data))
        assert reencoded[:43] == data[:43]
        assert reencoded[43:46] == bytes(3)
        assert reencoded[46:] == data[46:62]

    @given(
        gain=st.floats(allow_nan=False, min_value=-F32_MAX, max_value=F32_MAX),
        level=st.floats(allow_nan=False),
    )
    def test_float_roundtrip(self, gain: float, level: float) -> None:
        record = Measurements(gain=gain, level=level)
        decoded = decode(Measurements, encode(record))
        assert decoded == record
        assert decoded.level == level
        assert math.isclose(decoded.gain, gain, rel_tol=2**-23, abs_tol=2**-149)
        assert math.copysign(1.0, decoded.level) == math.copysign(1.0, level)

    @given(gain=st.floats(min_value=3.5e38, allow_infinity=False))
    def test_f32_overflow_rejected(self, gain: float) -> None:
        with pytest.raises(ValidationError, match="out of range for f32"):
            Measurements(gain=-gain, level=0.0)


class TestStreamProperties:
    """Property-based tests for streaming several records."""

    @given(records=st.lists(mixed_records, max_size=5))
    def test_writer_reader_sequence(self, records: list[Mixed]) -> None:
        sink = io.BytesIO()
        writer = RecordWriter(sink)
        for record in records:
            writer.write_as(record)

        reader = RecordReader(io.BytesIO(sink.getvalue()))
        assert [reader.read_as(Mixed) for _ in records] == records


class TestDirectiveProperties:
    """Property-based tests for directive resolution."""

    @given(tokens=st.permutations(["little-endian", "le", "pad(bytes = 4)"]))
    def test_resolution_ignores_token_order(self, tokens: list[str]) -> None:
        assert resolve_directive(tokens) == resolve_directive(list(reversed(tokens)))
