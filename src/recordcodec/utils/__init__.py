"""Utility functions for recordcodec.

This module provides size and layout calculation.
"""

from __future__ import annotations

from .sizing import FieldLayout, field_layout, field_offsets, field_sizes, record_size

__all__ = [
    "FieldLayout",
    "record_size",
    "field_sizes",
    "field_offsets",
    "field_layout",
]
