"""Per-field directives and their resolution.

A field is annotated with zero or more directive tokens inside ``Annotated``
metadata. Tokens may be strings from the directive surface or marker objects:

    ==================  =====================  ==========================
    String              Marker                 Meaning
    ==================  =====================  ==========================
    ``little-endian``   ``LittleEndian``       read/write little-endian
    ``big-endian``      ``BigEndian``          read/write big-endian
    ``native-endian``   ``NativeEndian``       read/write in native order
    ``pad``             ``Padding()``          skip the field's own size
    ``pad(bytes = N)``  ``Padding(bytes=N)``   skip exactly N bytes
    ==================  =====================  ==========================

``le``, ``be`` and ``ne`` are accepted as short forms of the byte orders.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from ..exceptions import DirectiveError


class ByteOrder(enum.Enum):
    """Byte order selected for a field.

    ``DEFAULT`` means no directive was given: scalars fall back to native
    order and nested records use their own codec.
    """

    LITTLE = "little"
    BIG = "big"
    NATIVE = "native"
    DEFAULT = "default"


LittleEndian = ByteOrder.LITTLE
BigEndian = ByteOrder.BIG
NativeEndian = ByteOrder.NATIVE


@dataclass(frozen=True)
class Padding:
    """Padding marker for use in ``Annotated`` metadata.

    ``Padding()`` skips the declared type's size; ``Padding(bytes=11)`` skips
    exactly 11 bytes whatever the declared type is.
    """

    bytes: Optional[Any] = None


@dataclass(frozen=True)
class SkipTypeSized:
    """Skip ``size_of(element_type) * arity`` bytes."""


@dataclass(frozen=True)
class SkipBytes:
    """Skip exactly ``count`` bytes."""

    count: int


PaddingMode = Union[SkipTypeSized, SkipBytes]


@dataclass(frozen=True)
class FieldDirective:
    """Resolved directives of one field."""

    byte_order: ByteOrder = ByteOrder.DEFAULT
    padding: Optional[PaddingMode] = None

    @property
    def is_padding(self) -> bool:
        return self.padding is not None


_BYTE_ORDER_TOKENS = {
    "little-endian": ByteOrder.LITTLE,
    "le": ByteOrder.LITTLE,
    "big-endian": ByteOrder.BIG,
    "be": ByteOrder.BIG,
    "native-endian": ByteOrder.NATIVE,
    "ne": ByteOrder.NATIVE,
}

_PAD_RE = re.compile(r"^pad\s*(?:\((?P<args>.*)\))?$", re.DOTALL)
_PAD_ARG_RE = re.compile(r"^\s*(?P<name>[A-Za-z_]\w*)\s*=\s*(?P<value>\S+)\s*$")
_INT_LITERAL_RE = re.compile(r"^[0-9][0-9_]*$")


def is_directive_token(token: Any) -> bool:
    """Return True if ``token`` is something the resolver understands."""
    return isinstance(token, (str, ByteOrder, Padding))


def resolve_directive(tokens: Iterable[Any]) -> FieldDirective:
    """Resolve the directive tokens of one field into a ``FieldDirective``.

    Resolution is a pure function of the tokens: resolving the same tokens
    twice yields equal directives.

    Args:
        tokens: Directive tokens in declaration order

    Returns:
        The resolved FieldDirective

    Raises:
        DirectiveError: On conflicting byte orders, malformed or repeated
            padding directives, or unknown tokens
    """
    byte_order = ByteOrder.DEFAULT
    padding: Optional[PaddingMode] = None
    seen_padding = False

    for token in tokens:
        order, pad = _parse_token(token)

        if order is not None:
            if byte_order is not ByteOrder.DEFAULT and byte_order is not order:
                raise DirectiveError(
                    f"conflicting byte-order directive: {byte_order.value} and {order.value}"
                )
            byte_order = order

        if pad is not None:
            if seen_padding:
                raise DirectiveError("conflicting padding directive: pad given more than once")
            padding = pad
            seen_padding = True

    return FieldDirective(byte_order=byte_order, padding=padding)


def _parse_token(token: Any) -> tuple[Optional[ByteOrder], Optional[PaddingMode]]:
    if isinstance(token, ByteOrder):
        if token is ByteOrder.DEFAULT:
            raise DirectiveError("ByteOrder.DEFAULT is not a directive; omit the annotation")
        return token, None

    if isinstance(token, Padding):
        if token.bytes is None:
            return None, SkipTypeSized()
        return None, SkipBytes(_padding_count(token.bytes))

    if isinstance(token, str):
        text = token.strip()
        if text.lower() in _BYTE_ORDER_TOKENS:
            return _BYTE_ORDER_TOKENS[text.lower()], None
        match = _PAD_RE.match(text)
        if match is not None:
            return None, _parse_pad_args(match.group("args"), token)
        raise DirectiveError(f"unknown directive {token!r}")

    raise DirectiveError(f"unknown directive {token!r}")


def _parse_pad_args(args: Optional[str], token: str) -> PaddingMode:
    if args is None:
        return SkipTypeSized()

    match = _PAD_ARG_RE.match(args)
    if match is None:
        raise DirectiveError(f"malformed padding directive {token!r}: expected pad(bytes = N)")
    if match.group("name") != "bytes":
        raise DirectiveError(
            f"malformed padding directive {token!r}: unknown parameter {match.group('name')!r}"
        )
    value = match.group("value")
    if not _INT_LITERAL_RE.match(value):
        raise DirectiveError(
            f"malformed padding directive {token!r}: {value!r} is not a non-negative integer"
        )
    return SkipBytes(int(value))


def _padding_count(value: Any) -> int:
    # bool is an int subclass but never a byte count
    if isinstance(value, bool) or not isinstance(value, int):
        raise DirectiveError(
            f"malformed padding directive: bytes={value!r} is not a non-negative integer"
        )
    count = int(value)
    if count < 0:
        raise DirectiveError(
            f"malformed padding directive: bytes={value!r} is not a non-negative integer"
        )
    return count
