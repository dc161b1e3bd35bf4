"""Schema introspection for Pydantic models.

This module analyzes a record class and extracts the byte-layout relevant
information for each field: its element type, its array arity and its resolved
directive. The resulting RecordSchema is immutable and lists fields in
declaration order, which is also the byte layout order.
"""

from __future__ import annotations

import functools
import logging
import operator
import threading
import types
from dataclasses import dataclass
from typing import Annotated, Any, Iterable, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel, RootModel
from pydantic.fields import FieldInfo

from ..exceptions import DirectiveError, SchemaError
from .directives import (
    ByteOrder,
    FieldDirective,
    SkipBytes,
    is_directive_token,
    resolve_directive,
)
from .primitives import Primitive

logger = logging.getLogger(__name__)

_building = threading.local()


@dataclass(frozen=True)
class ArrayLength:
    """Marks a ``list`` field as a fixed-size array of ``count`` elements."""

    count: Any


@dataclass(frozen=True)
class Single:
    """Arity of a plain (non-array) field."""

    @property
    def count(self) -> int:
        return 1


@dataclass(frozen=True)
class Fixed:
    """Arity of a fixed-size array field."""

    count: int


ArrayArity = Union[Single, Fixed]


@dataclass(frozen=True)
class ScalarType:
    """Element type that is a fixed-width primitive."""

    primitive: Primitive

    @property
    def size(self) -> int:
        return self.primitive.width

    def __str__(self) -> str:
        return self.primitive.name


@dataclass(frozen=True)
class RecordType:
    """Element type that is a nested record."""

    record_class: Type[BaseModel]

    @property
    def size(self) -> int:
        return get_schema(self.record_class).size

    def __str__(self) -> str:
        return self.record_class.__name__


TypeRef = Union[ScalarType, RecordType]


@dataclass(frozen=True)
class FieldSpec:
    """Schema information for a single field.

    Attributes:
        name: Field name
        element_type: Scalar primitive or nested record
        arity: Single() or Fixed(n)
        directive: Resolved byte-order and padding directive
    """

    name: str
    element_type: TypeRef
    arity: ArrayArity
    directive: FieldDirective

    @property
    def size(self) -> int:
        """Number of bytes this field occupies in the stream."""
        if isinstance(self.directive.padding, SkipBytes):
            return self.directive.padding.count
        return self.element_type.size * self.arity.count

    @property
    def type_name(self) -> str:
        if isinstance(self.arity, Fixed):
            return f"[{self.element_type}; {self.arity.count}]"
        return str(self.element_type)


@dataclass(frozen=True)
class RecordSchema:
    """Schema information for an entire record.

    Example:
        >>> schema = RecordSchema.from_model(Header)
        >>> for field in schema.fields:
        ...     print(f"{field.name}: {field.size} bytes")
    """

    record_class: Type[BaseModel]
    fields: Tuple[FieldSpec, ...]
    size: int

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @classmethod
    def from_model(cls, model_class: Any) -> RecordSchema:
        """Build a schema from a Pydantic model class.

        Args:
            model_class: Record class to introspect

        Returns:
            RecordSchema instance

        Raises:
            SchemaError: If the class is not a supported record shape or any
                field is unsupported
        """
        _check_record_shape(model_class)

        reserved = getattr(model_class, "record_helper_names", frozenset())
        for name in model_class.model_fields:
            if name in reserved:
                raise SchemaError(
                    f"Field {name}: name is reserved for a {model_class.__name__} helper method"
                )

        in_progress = _classes_in_progress()
        if model_class in in_progress:
            raise SchemaError(
                f"unsupported record shape: {model_class.__name__} contains itself"
            )
        in_progress.add(model_class)
        try:
            fields = tuple(
                _extract_field_spec(name, field_info)
                for name, field_info in model_class.model_fields.items()
            )
            size = sum(f.size for f in fields)
        finally:
            in_progress.discard(model_class)

        max_bytes = getattr(model_class, "record_max_bytes", None)
        if max_bytes is not None and size > max_bytes:
            raise SchemaError(
                f"{model_class.__name__}: layout is {size} bytes, "
                f"exceeds record_max_bytes={max_bytes}"
            )

        logger.debug(
            f"Built schema for {model_class.__name__}: {len(fields)} fields, {size} bytes"
        )
        return cls(record_class=model_class, fields=fields, size=size)


def _classes_in_progress() -> set:
    if not hasattr(_building, "classes"):
        _building.classes = set()
    return _building.classes


@functools.lru_cache(maxsize=None)
def get_schema(model_class: Type[BaseModel]) -> RecordSchema:
    """Return the schema of ``model_class``, building it on first use."""
    return RecordSchema.from_model(model_class)


def _check_record_shape(model_class: Any) -> None:
    if not isinstance(model_class, type) or not issubclass(model_class, BaseModel):
        raise SchemaError(
            f"unsupported record shape: {model_class!r} is not a Pydantic model with named fields"
        )
    if issubclass(model_class, RootModel):
        raise SchemaError(
            f"unsupported record shape: {model_class.__name__} is a RootModel "
            f"(a single anonymous field)"
        )
    if model_class.model_config.get("extra") == "allow":
        raise SchemaError(
            f"unsupported record shape: {model_class.__name__} allows extra fields, "
            f"so its fields are not fully enumerated"
        )
    if not model_class.__pydantic_complete__ and not model_class.model_rebuild(raise_errors=False):
        raise SchemaError(f"{model_class.__name__} has unresolved field annotations")


def _extract_field_spec(name: str, field_info: FieldInfo) -> FieldSpec:
    """Extract schema information from a Pydantic FieldInfo.

    Args:
        name: Field name
        field_info: Pydantic FieldInfo object

    Returns:
        FieldSpec with extracted information
    """
    annotation = field_info.annotation
    if annotation is None:
        raise SchemaError(f"Field {name} has no type annotation")

    metadata = list(field_info.metadata)

    try:
        directive = resolve_directive(m for m in metadata if is_directive_token(m))
    except DirectiveError as e:
        raise DirectiveError(f"Field {name}: {e}") from e

    if get_origin(annotation) is list:
        args = get_args(annotation)
        if not args:
            raise SchemaError(f"Field {name}: array fields need an element type")
        arity: ArrayArity = Fixed(_array_length(name, metadata))
        element_type = _element_type(name, args[0], (), in_array=True)
    else:
        arity = Single()
        element_type = _element_type(name, annotation, metadata, in_array=False)

    if isinstance(element_type, RecordType):
        # Nested records are validated even when a padding directive skips them
        get_schema(element_type.record_class)

    if (
        isinstance(element_type, RecordType)
        and directive.byte_order is not ByteOrder.DEFAULT
        and not directive.is_padding
    ):
        raise SchemaError(
            f"Field {name}: byte-order directive on record type "
            f"{element_type.record_class.__name__}; records use their own field directives"
        )

    return FieldSpec(name=name, element_type=element_type, arity=arity, directive=directive)


def _array_length(name: str, metadata: Iterable[Any]) -> int:
    min_length = None
    max_length = None

    for constraint in metadata:
        if isinstance(constraint, ArrayLength):
            return _resolve_count(name, constraint.count)
        if hasattr(constraint, "min_length"):
            min_length = constraint.min_length
        if hasattr(constraint, "max_length"):
            max_length = constraint.max_length

    if min_length is not None and min_length == max_length:
        return _resolve_count(name, min_length)

    raise SchemaError(
        f"Field {name}: variable-length arrays are not supported. "
        f"Use Array(element, n) or equal min_length/max_length."
    )


def _resolve_count(name: str, value: Any) -> int:
    try:
        count = operator.index(value)
    except TypeError as e:
        raise SchemaError(f"Field {name}: array length {value!r} is not an integer") from e
    if count < 0:
        raise SchemaError(f"Field {name}: array length must be non-negative, got {count}")
    return count


def _element_type(name: str, tp: Any, metadata: Iterable[Any], *, in_array: bool) -> TypeRef:
    metadata = list(metadata)

    if get_origin(tp) is Annotated:
        tp, *extra = get_args(tp)
        if in_array and any(is_directive_token(m) for m in extra):
            raise SchemaError(
                f"Field {name}: directives must annotate the field, not the array element"
            )
        metadata.extend(extra)

    primitive = next((m for m in metadata if isinstance(m, Primitive)), None)
    if primitive is not None:
        expected = float if primitive.kind == "float" else int
        if tp is not expected:
            raise SchemaError(
                f"Field {name}: {primitive.name} must annotate {expected.__name__}, got {tp!r}"
            )
        return ScalarType(primitive)

    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return RecordType(tp)

    if get_origin(tp) is list:
        raise SchemaError(f"Field {name}: nested arrays are not supported")

    if get_origin(tp) is Union or (
        hasattr(types, "UnionType") and isinstance(tp, types.UnionType)
    ):
        raise SchemaError(f"Field {name}: Optional and Union types are not supported")

    if tp in (int, float):
        raise SchemaError(
            f"Field {name}: {tp.__name__} fields need a fixed width. "
            f"Use U8..U128, I8..I128, F32 or F64."
        )

    raise SchemaError(
        f"Field {name}: unsupported type {tp!r}. "
        f"Supported: scalar aliases, nested records, Array(element, n)."
    )
