"""
Sort emulation for columns the underlying store cannot sort.

A column can be made sortable in two ways:

- ``replace_field_sorting(name, sort)``: requests sorting on *name* are
  rewritten to the equivalent *sort* (inverted for descending requests)
  and pushed down to the child collection.
- ``emulate_field_sorting(name)``: requests sorting on *name* fetch every
  matching record once, sort them in process, then apply the page window.

Sorting on a relation path (``author:lastName``) follows the mode set on the
related collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from datasource_toolkit.exceptions import UnsupportedError, ValidationError
from datasource_toolkit.field_path import SEPARATOR, FieldPath
from datasource_toolkit.schema import ManyToOneSchema, OneToOneSchema
from datasource_toolkit.sort import Sort, SortClause
from datasource_toolkit.validation import validate_field

from .collection_decorator import CollectionDecorator

if TYPE_CHECKING:
    import builtins

    from datasource_toolkit.collection import Collection
    from datasource_toolkit.filter import PaginatedFilter
    from datasource_toolkit.projection import Projection
    from datasource_toolkit.records import RecordData
    from datasource_toolkit.schema import CollectionSchema

    from .datasource_decorator import DatasourceDecorator

logger = logging.getLogger("datasource.sort_emulation")


@dataclass(frozen=True)
class Substituted:
    """Sort on the field is replaced by an equivalent sort."""

    sort: Sort


@dataclass(frozen=True)
class FullScan:
    """Sort on the field is computed in process."""


SortMode = Union[Substituted, FullScan]


class SortEmulationCollection(CollectionDecorator):
    def __init__(self, child_collection: Collection, datasource: DatasourceDecorator) -> None:
        super().__init__(child_collection, datasource)
        self._sorts: dict[str, SortMode] = {}

    # -- Customisation --------------------------------------------------------

    def emulate_field_sorting(self, name: str) -> None:
        """Sort *name* in process."""
        self._set_sort_mode(name, FullScan())

    def replace_field_sorting(self, name: str, equivalent_sort: Sort | None) -> None:
        """Sort *name* by *equivalent_sort* instead."""
        if not equivalent_sort:
            raise ValidationError(
                "A new sorting method should be provided to replace field sorting"
            )
        equivalent_sort = Sort(*equivalent_sort)
        if self._refers_to(equivalent_sort, name, set()):
            raise ValidationError(
                f"Sort replacement for '{self.name}.{name}' refers back to itself"
            )
        self._set_sort_mode(name, Substituted(equivalent_sort))

    def _refers_to(self, sort: Sort, name: str, seen: set[tuple[int, str]]) -> bool:
        """Whether rewriting *sort* would reach *name* on this collection."""
        return any(self._clause_refers_to(clause, (self, name), seen) for clause in sort)

    def _clause_refers_to(
        self,
        clause: SortClause,
        target: tuple[SortEmulationCollection, str],
        seen: set[tuple[int, str]],
    ) -> bool:
        parsed = FieldPath.parse(clause.field)
        if parsed.tail is not None:
            association = self._association(parsed.head)
            return association is not None and any(
                association._clause_refers_to(nested, target, seen)
                for nested in Sort(clause).unnest()
            )

        if self is target[0] and clause.field == target[1]:
            return True
        if (id(self), clause.field) in seen:
            return False
        seen.add((id(self), clause.field))

        mode = self._sorts.get(clause.field)
        return isinstance(mode, Substituted) and any(
            self._clause_refers_to(nested, target, seen) for nested in mode.sort
        )

    def _set_sort_mode(self, name: str, mode: SortMode) -> None:
        validate_field(self, name)
        if SEPARATOR in name:
            raise UnsupportedError("Cannot replace sort on relation")

        self._sorts[name] = mode
        logger.debug("Sort on %s.%s set to %s", self.name, name, mode)

    def refine_schema(self, child_schema: CollectionSchema) -> CollectionSchema:
        return child_schema.with_sortable(self._sorts)

    # -- Reads ----------------------------------------------------------------

    async def list(
        self, filter: PaginatedFilter, projection: Projection
    ) -> builtins.list[RecordData]:
        sort = self.rewrite_sort(filter.sort) if filter.sort else filter.sort
        child_filter = filter.override(sort=sort)

        if not sort or not any(self.is_emulated(clause.field) for clause in sort):
            return await self.child_collection.list(child_filter, projection)

        records = await self.child_collection.list(
            child_filter.override(sort=None, page=None),
            projection.union(sort.projection),
        )
        logger.debug(
            "Emulating sort %r on %s over %d record(s)", sort, self.name, len(records)
        )

        records = sort.apply(records)
        if child_filter.page is not None:
            records = child_filter.page.apply(records)
        return projection.apply(records)

    def rewrite_sort(self, sort: Sort) -> Sort:
        """Replace every substituted clause by its equivalent sort."""
        return sort.replace_clauses(self._rewrite_clause)

    def is_emulated(self, path: str) -> bool:
        parsed = FieldPath.parse(path)
        if parsed.tail is None:
            return isinstance(self._sorts.get(parsed.head), FullScan)

        association = self._association(parsed.head)
        return association is not None and association.is_emulated(str(parsed.tail))

    def _rewrite_clause(self, clause: SortClause) -> Sort:
        parsed = FieldPath.parse(clause.field)

        if parsed.tail is not None:
            association = self._association(parsed.head)
            if association is None:
                return Sort(clause)
            return association.rewrite_sort(Sort(clause).unnest()).nest(parsed.head)

        mode = self._sorts.get(clause.field)
        if not isinstance(mode, Substituted):
            return Sort(clause)

        equivalent = mode.sort if clause.ascending else mode.sort.inverse()
        return self.rewrite_sort(equivalent)

    def _association(self, relation: str) -> SortEmulationCollection | None:
        schema = self.schema.fields.get(relation)
        if not isinstance(schema, ManyToOneSchema | OneToOneSchema):
            return None
        association = self.datasource.get_collection(schema.foreign_collection)
        if not isinstance(association, SortEmulationCollection):
            return None
        return association
