"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

SAMPLE_BYTES = bytes(
    [
        30, 113, 89, 178, 217, 118, 243, 7, 67, 25, 132, 7, 240, 193, 119, 176,
        106, 194, 164, 76, 100, 15, 49, 94, 129, 93, 34, 122, 135, 84, 19, 162,
    ]
)

NESTED_BYTES = SAMPLE_BYTES + bytes(
    [
        177, 28, 217, 72, 34, 138, 120, 126, 147, 167, 89, 14, 96, 133, 107, 66,
        141, 244, 174, 13, 60, 26, 52, 53, 123, 162, 196, 107, 33, 77, 222, 199,
        147, 209, 31, 124, 70, 155, 1, 93, 120, 87, 128, 217, 184, 128, 127, 232,
        247, 25, 89, 43, 192, 212, 193, 177, 36, 197, 157, 140, 242, 208, 135, 155,
        117, 114, 195, 215, 109, 70, 234, 112,
    ]
)


@pytest.fixture
def sample_bytes() -> bytes:
    """32-byte payload: u32 BE, i128 native, u8 BE, 11 bytes of padding."""
    return SAMPLE_BYTES


@pytest.fixture
def nested_bytes() -> bytes:
    """104-byte payload whose first 86 bytes hold a record with a nested record."""
    return NESTED_BYTES
