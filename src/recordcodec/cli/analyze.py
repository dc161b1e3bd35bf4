"""Record analysis and decoding CLI commands."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType

from ..codec.decoder import decode
from ..models.base import BaseRecord
from ..models.fields import Pad
from ..utils.sizing import field_layout, record_size


def load_records(file_path: Path) -> dict[str, type[BaseRecord]]:
    """Load all BaseRecord classes defined in a Python file.

    Args:
        file_path: Path to Python file containing record definitions

    Returns:
        Mapping of class name to record class, in definition order
    """
    module = _load_module(file_path)

    records: dict[str, type[BaseRecord]] = {}
    for name, obj in vars(module).items():
        if not inspect.isclass(obj) or obj in (BaseRecord, Pad) or not issubclass(obj, BaseRecord):
            continue
        # Only include classes defined in this file (not imported)
        if obj.__module__ == module.__name__:
            records[name] = obj

    return records


def _load_module(file_path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)
    return module


def analyze_file(file_path: Path) -> None:
    """Print the byte layout of every BaseRecord class in a Python file."""
    records = load_records(file_path)

    if not records:
        print(f"No BaseRecord classes found in {file_path}")
        return

    print("|" * 7, "recordcodec: Fixed-Layout Binary Records", "|" * 7)
    print(f"{len(records)} record{'s' if len(records) != 1 else ''} loaded.")
    print("Offsets and sizes are in bytes.")
    print()

    for record_class in records.values():
        analyze_record_class(record_class)


def analyze_record_class(record_class: type[BaseRecord]) -> None:
    """Print the field-by-field layout of a single record class."""
    name = record_class.__name__
    print(f"{'=' * 19} {name} {'=' * 19}")

    total = record_size(record_class)
    print(f"Size of record: {total} bytes")
    if record_class.record_max_bytes is not None:
        print(f"Allowed maximum size of record: {record_class.record_max_bytes} bytes")
    print()

    for i, item in enumerate(field_layout(record_class), 1):
        field_desc = f"{i}. {item.name}: {item.type_name}"
        dots = "." * max(1, 40 - len(field_desc))
        print(f"  {item.offset:>6}  {field_desc}{dots}{item.size:>4} bytes  {item.operation}")

    print()


def decode_file(definitions: Path, record_name: str, input_path: Path) -> str:
    """Decode a binary file as one of the records defined in ``definitions``.

    Args:
        definitions: Python file with record definitions
        record_name: Name of the record class to decode
        input_path: Binary file to decode

    Returns:
        The decoded record as indented JSON
    """
    records = load_records(definitions)
    if record_name not in records:
        known = ", ".join(records) or "none"
        raise ValueError(f"Record {record_name!r} not found in {definitions} (found: {known})")

    with input_path.open("rb") as f:
        record = decode(records[record_name], f)
    return record.model_dump_json(indent=2)
