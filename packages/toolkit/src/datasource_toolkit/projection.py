"""Projection - the set of field paths a request needs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .field_path import FieldPath

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .records import RecordData


class Projection(tuple[str, ...]):
    """
    Ordered, de-duplicated tuple of colon-delimited paths.

    ``Projection("id", "author:lastName")`` selects ``id`` locally and
    ``lastName`` through the ``author`` relation.
    """

    def __new__(cls, *paths: str) -> Projection:
        return super().__new__(cls, dict.fromkeys(paths))

    @property
    def columns(self) -> list[str]:
        return [path for path in self if FieldPath.parse(path).is_local]

    @property
    def relations(self) -> dict[str, Projection]:
        """Sub-projection per relation, in first-seen order."""
        grouped: dict[str, list[str]] = {}
        for path in self:
            parsed = FieldPath.parse(path)
            if parsed.tail is not None:
                grouped.setdefault(parsed.head, []).append(str(parsed.tail))
        return {name: Projection(*paths) for name, paths in grouped.items()}

    def union(self, *others: Iterable[str] | None) -> Projection:
        paths = list(self)
        for other in others:
            if other:
                paths.extend(other)
        return Projection(*paths)

    def nest(self, prefix: str | None) -> Projection:
        if not prefix:
            return self
        return Projection(*(str(FieldPath.parse(path).nest(prefix)) for path in self))

    def reproject(self, record: RecordData | None) -> RecordData | None:
        if record is None:
            return None
        result: dict[str, Any] = {field: record.get(field) for field in self.columns}
        for relation, sub_projection in self.relations.items():
            result[relation] = sub_projection.reproject(record.get(relation))
        return result

    def apply(self, records: Iterable[RecordData]) -> list[RecordData]:
        return [self.reproject(record) for record in records]  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"Projection({', '.join(map(repr, self))})"
