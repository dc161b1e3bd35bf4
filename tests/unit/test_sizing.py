"""Unit tests for size and layout utilities."""

from __future__ import annotations

from typing import Annotated

from recordcodec import (
    I128,
    U8,
    U16,
    U32,
    Array,
    BaseRecord,
    Pad,
    field_layout,
    field_offsets,
    field_sizes,
    record_size,
)


class Sample(BaseRecord):
    f1: Annotated[U32, "big-endian"]
    f2: Annotated[I128, "native-endian"]
    f3: Annotated[U8, "big-endian"]
    reserved: Annotated[Pad, "pad(bytes = 11)"] = Pad()


class Status(BaseRecord):
    vehicle_id: U8
    depth: Annotated[U32, "big-endian"]
    readings: Annotated[Array(U16, 3), "little-endian"]


class TestRecordSize:
    """Test record size calculation."""

    def test_class_and_instance(self) -> None:
        assert record_size(Sample) == 32
        assert record_size(Sample(f1=1, f2=2, f3=3)) == 32

    def test_size_does_not_depend_on_values(self) -> None:
        small = Status(vehicle_id=0, depth=0, readings=[0, 0, 0])
        large = Status(vehicle_id=255, depth=2**32 - 1, readings=[65535] * 3)
        assert record_size(small) == record_size(large) == 11


class TestFieldLayout:
    """Test per-field offsets and sizes."""

    def test_offsets(self) -> None:
        assert field_offsets(Sample) == {"f1": 0, "f2": 4, "f3": 20, "reserved": 21}

    def test_sizes(self) -> None:
        assert field_sizes(Sample) == {"f1": 4, "f2": 16, "f3": 1, "reserved": 11}
        assert field_sizes(Status) == {"vehicle_id": 1, "depth": 4, "readings": 6}

    def test_layout_details(self) -> None:
        layout = field_layout(Status)

        assert [item.name for item in layout] == ["vehicle_id", "depth", "readings"]
        assert layout[2].offset == 5
        assert layout[2].type_name == "[u16; 3]"
        assert layout[2].operation == "3 x u16 little-endian"
        assert layout[0].operation == "u8 native-endian (default)"

    def test_sizes_sum_to_record_size(self) -> None:
        assert sum(field_sizes(Status).values()) == record_size(Status)
