"""Record size and layout utilities.

This module provides functions to calculate the encoded size and field layout
of records without actually encoding them.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from ..codec.compiler import compile_codec


@dataclass(frozen=True)
class FieldLayout:
    """Placement of one field in a record's byte layout.

    Attributes:
        name: Field name
        offset: Byte offset of the field from the start of the record
        size: Number of bytes the field occupies
        type_name: Declared type, e.g. ``u32`` or ``[u16; 2]``
        operation: Operation used to read/write it, e.g. ``u32 big-endian``
    """

    name: str
    offset: int
    size: int
    type_name: str
    operation: str


def _record_class(record_or_class: BaseModel | type[BaseModel]) -> type[BaseModel]:
    if isinstance(record_or_class, BaseModel):
        return type(record_or_class)
    return record_or_class


def record_size(record_or_class: BaseModel | type[BaseModel]) -> int:
    """Calculate the encoded size of a record in bytes.

    The size is determined by the schema alone; it never depends on field values.

    Args:
        record_or_class: Record instance or class

    Returns:
        Size in bytes

    Raises:
        SchemaError: If schema is invalid

    Example:
        >>> class Status(BaseRecord):
        ...     vehicle_id: U8
        ...     depth: Annotated[U32, "big-endian"]
        >>> record_size(Status)
        5
    """
    return compile_codec(_record_class(record_or_class)).size


def field_sizes(record_or_class: BaseModel | type[BaseModel]) -> dict[str, int]:
    """Get the size in bytes of each field in a record.

    Example:
        >>> field_sizes(Status)
        {'vehicle_id': 1, 'depth': 4}
    """
    return {item.name: item.size for item in field_layout(record_or_class)}


def field_offsets(record_or_class: BaseModel | type[BaseModel]) -> dict[str, int]:
    """Get the byte offset of each field in a record.

    Example:
        >>> field_offsets(Status)
        {'vehicle_id': 0, 'depth': 1}
    """
    return {item.name: item.offset for item in field_layout(record_or_class)}


def field_layout(record_or_class: BaseModel | type[BaseModel]) -> list[FieldLayout]:
    """Describe every field's offset, size, type and operation, in layout order.

    Args:
        record_or_class: Record instance or class

    Returns:
        List of FieldLayout, one per field

    Raises:
        SchemaError: If schema is invalid
    """
    codec = compile_codec(_record_class(record_or_class))
    layout = []
    offset = 0
    for spec, (_, operation) in zip(codec.schema.fields, codec.operations()):
        layout.append(
            FieldLayout(
                name=spec.name,
                offset=offset,
                size=spec.size,
                type_name=spec.type_name,
                operation=operation,
            )
        )
        offset += spec.size
    return layout
