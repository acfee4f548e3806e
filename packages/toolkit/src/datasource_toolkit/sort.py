"""Sort - ordered sort clauses, the first one taking precedence."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple

from .field_path import FieldPath
from .projection import Projection
from .records import get_field_value

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .records import RecordData


class SortClause(NamedTuple):
    field: str
    ascending: bool = True


class Sort(tuple[SortClause, ...]):
    """Immutable sequence of :class:`SortClause`; order is tie-break precedence."""

    def __new__(cls, *clauses: SortClause | tuple[str, bool]) -> Sort:
        return super().__new__(cls, (SortClause(*clause) for clause in clauses))

    @property
    def projection(self) -> Projection:
        return Projection(*(clause.field for clause in self))

    def inverse(self) -> Sort:
        return Sort(*(SortClause(c.field, not c.ascending) for c in self))

    def nest(self, prefix: str | None) -> Sort:
        if not prefix:
            return self
        return Sort(
            *(
                SortClause(str(FieldPath.parse(c.field).nest(prefix)), c.ascending)
                for c in self
            )
        )

    def unnest(self) -> Sort:
        """Strip the common first relation of every clause."""
        prefixes = {FieldPath.parse(c.field).head for c in self}
        if len(prefixes) != 1 or any(FieldPath.parse(c.field).is_local for c in self):
            raise ValueError("Cannot unnest sort.")
        return Sort(
            *(SortClause(str(FieldPath.parse(c.field).tail), c.ascending) for c in self)
        )

    def replace_clauses(self, handler: Callable[[SortClause], Iterable[SortClause]]) -> Sort:
        """Replace each clause by zero, one or several clauses."""
        return Sort(*(new for clause in self for new in handler(clause)))

    def apply(self, records: Iterable[RecordData]) -> list[RecordData]:
        """
        Stable in-process sort.

        ``None`` sorts before any value in ascending order.  Clauses are
        applied from the last to the first so that the first clause wins
        (``list.sort`` is stable, also with ``reverse=True``).
        """
        rows = list(records)
        for clause in reversed(self):
            rows.sort(key=_sort_key(clause.field), reverse=not clause.ascending)
        return rows

    def __repr__(self) -> str:
        return f"Sort({', '.join(map(repr, self))})"


def _sort_key(field: str) -> Callable[[RecordData], tuple[bool, Any]]:
    path = FieldPath.parse(field)

    def key(record: RecordData) -> tuple[bool, Any]:
        value = get_field_value(record, path)
        return (value is not None, value)

    return key
