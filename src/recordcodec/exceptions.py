"""Exception hierarchy for recordcodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from RecordCodecError for easy catching of any recordcodec-specific error.
"""

from __future__ import annotations

from typing import Iterable


class RecordCodecError(Exception):
    """Base exception for all recordcodec errors."""

    pass


class SchemaError(RecordCodecError):
    """Raised when a record schema is invalid or unsupported.

    Schema errors are raised once, while a record class is compiled, and never
    during encode/decode of an already compiled record.

    Examples:
        - Record is not a model with named fields
        - Unsupported field type (bare int, str, Optional, variable-length list)
        - Byte-order directive on a nested record field
        - Compiled layout exceeds record_max_bytes
    """

    pass


class DirectiveError(SchemaError):
    """Raised when a field's directives cannot be resolved.

    Examples:
        - Conflicting byte-order directives (little-endian and big-endian)
        - Malformed padding directive (pad(size=3), pad(bytes=-1))
        - Unknown directive token
    """

    pass


class _FieldPathMixin:
    """Carries the dotted path of the field that was being processed."""

    message: str
    path: list[str]

    def _init_path(self, message: str, path: Iterable[str]) -> None:
        self.message = message
        self.path = list(path)

    def prepend_path(self, segment: str) -> None:
        """Record that the error happened inside field ``segment``."""
        self.path.insert(0, segment)

    @property
    def field_path(self) -> str:
        out = ""
        for segment in self.path:
            if segment.startswith("[") or not out:
                out += segment
            else:
                out += "." + segment
        return out

    def __str__(self) -> str:
        if self.path:
            return f"{self.field_path}: {self.message}"
        return self.message


class EncodeError(_FieldPathMixin, RecordCodecError):
    """Raised when encoding a record fails.

    Examples:
        - Value out of range for its primitive (300 in a U8 field)
        - Array value with the wrong number of elements
        - Sink rejected the write (see SinkError)
    """

    def __init__(self, message: str, *, path: Iterable[str] = ()) -> None:
        super().__init__(message)
        self._init_path(message, path)


class SinkError(EncodeError):
    """Raised when the byte sink rejects a write (closed, full, I/O error)."""

    pass


class DecodeError(_FieldPathMixin, RecordCodecError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (see ShortReadError)
        - Byte source raised an I/O error
    """

    def __init__(self, message: str, *, path: Iterable[str] = ()) -> None:
        super().__init__(message)
        self._init_path(message, path)


class ShortReadError(DecodeError):
    """Raised when the byte source ends before the requested bytes were read.

    Attributes:
        expected: Number of bytes requested
        received: Number of bytes the source supplied before ending
    """

    def __init__(self, expected: int, received: int, *, path: Iterable[str] = ()) -> None:
        super().__init__(
            f"Truncated data: expected {expected} bytes, got {received}",
            path=path,
        )
        self.expected = expected
        self.received = received
