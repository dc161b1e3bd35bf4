"""Codec generation from record schemas.

A RecordCodec is derived once per record class from its RecordSchema. Each
field is turned into an Operation (primitive read/write, nested record codec,
fixed repetition, or padding skip) and the operations run strictly in
declaration order. Codecs are cached per class by ``compile_codec``.
"""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, List, Type, TypeVar

from pydantic import BaseModel

from ..exceptions import DecodeError, EncodeError
from .directives import ByteOrder, FieldDirective, SkipBytes, SkipTypeSized
from .io import ByteSink, ByteSource, read_exact, write_all
from .primitives import Primitive
from .schema import FieldSpec, Fixed, RecordSchema, ScalarType, TypeRef, get_schema

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class Operation(ABC):
    """One step of a generated codec.

    Attributes:
        size: Number of bytes the operation consumes or produces
    """

    size: int

    @abstractmethod
    def decode(self, source: ByteSource) -> Any:
        """Read this operation's bytes and return the decoded value."""

    @abstractmethod
    def encode(self, value: Any, sink: ByteSink) -> None:
        """Write ``value`` as this operation's bytes."""

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description, e.g. ``u32 big-endian``."""


class PrimitiveOp(Operation):
    """Read or write one scalar in a fixed byte order."""

    def __init__(self, primitive: Primitive, byte_order: ByteOrder) -> None:
        self.primitive = primitive
        self.byte_order = byte_order
        self.size = primitive.width

        if byte_order is ByteOrder.LITTLE:
            self._read, self._write = primitive.read_le, primitive.write_le
        elif byte_order is ByteOrder.BIG:
            self._read, self._write = primitive.read_be, primitive.write_be
        else:
            # NATIVE and DEFAULT: a scalar's own codec is its native-order codec
            self._read, self._write = primitive.read_native, primitive.write_native

    def decode(self, source: ByteSource) -> Any:
        return self._read(source)

    def encode(self, value: Any, sink: ByteSink) -> None:
        self._write(value, sink)

    def describe(self) -> str:
        if self.byte_order is ByteOrder.DEFAULT:
            return f"{self.primitive.name} native-endian (default)"
        return f"{self.primitive.name} {self.byte_order.value}-endian"


class RecordOp(Operation):
    """Delegate to a nested record's own codec."""

    def __init__(self, codec: RecordCodec[Any]) -> None:
        self.codec = codec
        self.size = codec.size

    def decode(self, source: ByteSource) -> Any:
        return self.codec.decode(source)

    def encode(self, value: Any, sink: ByteSink) -> None:
        if not isinstance(value, self.codec.record_class):
            raise EncodeError(
                f"expected {self.codec.record_class.__name__}, got {type(value).__name__}"
            )
        self.codec.encode(value, sink)

    def describe(self) -> str:
        return f"record {self.codec.record_class.__name__}"


class RepeatOp(Operation):
    """Apply an element operation ``count`` times, in index order."""

    def __init__(self, element: Operation, count: int) -> None:
        self.element = element
        self.count = count
        self.size = element.size * count

    def decode(self, source: ByteSource) -> List[Any]:
        values = []
        for index in range(self.count):
            try:
                values.append(self.element.decode(source))
            except DecodeError as e:
                e.prepend_path(f"[{index}]")
                raise
        return values

    def encode(self, value: Any, sink: ByteSink) -> None:
        try:
            items = list(value)
        except TypeError as e:
            raise EncodeError(f"expected a sequence, got {type(value).__name__}") from e
        if len(items) != self.count:
            raise EncodeError(f"expected {self.count} elements, got {len(items)}")
        for index, item in enumerate(items):
            try:
                self.element.encode(item, sink)
            except EncodeError as e:
                e.prepend_path(f"[{index}]")
                raise

    def describe(self) -> str:
        return f"{self.count} x {self.element.describe()}"


class SkipOp(Operation):
    """Consume (or emit) padding bytes and yield the field's default value."""

    def __init__(self, count: int, default: Callable[[], Any], reason: str) -> None:
        self.size = count
        self._default = default
        self._reason = reason

    def decode(self, source: ByteSource) -> Any:
        read_exact(source, self.size)
        return self._default()

    def encode(self, value: Any, sink: ByteSink) -> None:
        write_all(sink, bytes(self.size))

    def describe(self) -> str:
        return f"skip {self.size} bytes ({self._reason})"


class RecordCodec(Generic[M]):
    """Paired decode/encode procedure derived from one RecordSchema.

    Example:
        >>> codec = RecordCodec(RecordSchema.from_model(Header))
        >>> codec.size
        8
        >>> header = codec.decode(io.BytesIO(data))
    """

    def __init__(self, schema: RecordSchema) -> None:
        self.schema = schema
        self.record_class: Type[M] = schema.record_class  # type: ignore[assignment]
        self._steps: tuple[tuple[str, Operation], ...] = tuple(
            (spec.name, build_operation(spec)) for spec in schema.fields
        )
        self.size = sum(op.size for _, op in self._steps)

    def operations(self) -> list[tuple[str, str]]:
        """Return ``(field name, operation description)`` in execution order."""
        return [(name, op.describe()) for name, op in self._steps]

    def decode(self, source: ByteSource) -> M:
        """Decode one record from ``source``.

        Raises:
            DecodeError: If the source fails or ends early (ShortReadError)
        """
        values: dict[str, Any] = {}
        for name, op in self._steps:
            try:
                values[name] = op.decode(source)
            except DecodeError as e:
                e.prepend_path(name)
                raise
        return self.record_class.model_construct(**values)

    def encode(self, record: M, sink: ByteSink) -> None:
        """Encode ``record`` into ``sink``.

        Raises:
            EncodeError: If a value cannot be represented or the sink rejects
                a write (SinkError)
        """
        for name, op in self._steps:
            try:
                op.encode(getattr(record, name), sink)
            except EncodeError as e:
                e.prepend_path(name)
                raise

    def default(self) -> M:
        """Return a record with every field set to its type's default."""
        return self.record_class.model_construct(
            **{spec.name: default_value(spec) for spec in self.schema.fields}
        )

    def __repr__(self) -> str:
        return f"RecordCodec({self.record_class.__name__}, size={self.size})"


def build_operation(spec: FieldSpec) -> Operation:
    """Derive the operation that reads/writes one field."""
    directive: FieldDirective = spec.directive

    if directive.padding is not None:
        default = functools.partial(default_value, spec)
        if isinstance(directive.padding, SkipTypeSized):
            return SkipOp(spec.size, default, f"pad {spec.type_name}")
        if isinstance(directive.padding, SkipBytes):
            return SkipOp(directive.padding.count, default, "pad bytes")

    element = _element_operation(spec.element_type, directive.byte_order)
    if isinstance(spec.arity, Fixed):
        return RepeatOp(element, spec.arity.count)
    return element


def _element_operation(element_type: TypeRef, byte_order: ByteOrder) -> Operation:
    if isinstance(element_type, ScalarType):
        return PrimitiveOp(element_type.primitive, byte_order)
    return RecordOp(compile_codec(element_type.record_class))


def default_value(spec: FieldSpec) -> Any:
    """Default value of a field's declared type.

    Scalars default to zero, records to a record of defaults, and arrays to a
    list of element defaults.
    """
    if isinstance(spec.arity, Fixed):
        return [_element_default(spec.element_type) for _ in range(spec.arity.count)]
    return _element_default(spec.element_type)


def _element_default(element_type: TypeRef) -> Any:
    if isinstance(element_type, ScalarType):
        return element_type.primitive.default
    return compile_codec(element_type.record_class).default()


@functools.lru_cache(maxsize=None)
def compile_codec(record_class: Type[M]) -> RecordCodec[M]:
    """Compile (or fetch the cached) codec for ``record_class``.

    Schema errors surface here, before any bytes are read or written, and no
    codec is cached for a record class that fails to compile.

    Raises:
        SchemaError: If the record class or any nested record is invalid
    """
    codec: RecordCodec[M] = RecordCodec(get_schema(record_class))
    logger.debug(
        f"Compiled codec for {record_class.__name__}: "
        f"{len(codec.schema.fields)} fields, {codec.size} bytes"
    )
    return codec

