"""Helpers for plain-dict records with nested relations."""

from __future__ import annotations

from typing import Any

from .field_path import FieldPath

RecordData = dict[str, Any]


def get_field_value(record: RecordData | None, path: str | FieldPath) -> Any:
    """Walk a nested record along *path*; missing hops resolve to ``None``."""
    value: Any = record
    for segment in FieldPath.parse(path).segments:
        if value is None:
            return None
        value = value.get(segment)
    return value
