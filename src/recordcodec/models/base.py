"""Base record class and recordcodec-specific Pydantic configuration.

This module provides the BaseRecord class that all recordcodec records should inherit from.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

R = TypeVar("R", bound="BaseRecord")


class BaseRecord(BaseModel):
    """Base class for all fixed-layout records.

    Records declare their fields in byte-layout order using the scalar aliases,
    ``Array`` and ``Pad`` from :mod:`recordcodec.models.fields`, with per-field
    directives in ``Annotated`` metadata.

    recordcodec-specific options can be configured as ClassVar attributes:

    Example:
        >>> from typing import Annotated, ClassVar, Optional
        >>> class Header(BaseRecord):
        ...     magic: Annotated[U32, "big-endian"]
        ...     version: U16
        ...     reserved: Annotated[Pad, "pad(bytes = 2)"] = Pad()
        ...
        ...     record_max_bytes: ClassVar[Optional[int]] = 8

    Attributes:
        record_max_bytes: Maximum encoded size in bytes (optional, checked at compile time)
        record_helper_names: Names of the helper methods below; fields may not
            use them (rejected at compile time)
    """

    model_config = ConfigDict(
        # Lax mode: compatible inputs such as 1.0 for an int field are coerced
        strict=False,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    record_max_bytes: ClassVar[int | None] = None
    record_helper_names: ClassVar[frozenset[str]] = frozenset(
        {"record_size", "default", "from_bytes", "to_bytes"}
    )

    @classmethod
    def record_size(cls) -> int:
        """Return the encoded size of this record in bytes."""
        from ..codec.compiler import compile_codec

        return compile_codec(cls).size

    @classmethod
    def default(cls: type[R]) -> R:
        """Return the record with every field set to its type's default."""
        from ..codec.compiler import compile_codec

        return compile_codec(cls).default()

    @classmethod
    def from_bytes(cls: type[R], data: Any) -> R:
        """Decode a record from bytes or a byte source."""
        from ..codec.decoder import decode

        return decode(cls, data)

    def to_bytes(self) -> bytes:
        """Encode this record to bytes."""
        from ..codec.encoder import encode

        return encode(self)
