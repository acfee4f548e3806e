"""MemoryCollection - list-backed fake collection for unit tests."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from .collection import Collection

if TYPE_CHECKING:
    import builtins
    from collections.abc import Iterable

    from .collection import Datasource
    from .filter import PaginatedFilter
    from .projection import Projection
    from .records import RecordData
    from .schema import CollectionSchema


class MemoryCollection(Collection):
    """
    In-memory implementation of :class:`Collection`.

    Records are plain dicts, relations already nested.  ``list`` filters,
    sorts, pages and projects them in that order, the way a database would.
    The collection registers itself in *datasource*.
    """

    def __init__(
        self,
        name: str,
        datasource: Datasource,
        schema: CollectionSchema,
        records: Iterable[RecordData] = (),
    ) -> None:
        self._name = name
        self._datasource = datasource
        self._schema = schema
        self._records: builtins.list[RecordData] = [copy.deepcopy(r) for r in records]
        self.requests: builtins.list[tuple[PaginatedFilter, Projection]] = []
        datasource.add_collection(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> CollectionSchema:
        return self._schema

    @property
    def datasource(self) -> Datasource:
        return self._datasource

    async def list(
        self, filter: PaginatedFilter, projection: Projection
    ) -> builtins.list[RecordData]:
        self.requests.append((filter, projection))

        rows = list(self._records)
        if filter.condition_tree is not None:
            rows = filter.condition_tree.apply(rows)
        if filter.sort:
            rows = filter.sort.apply(rows)
        if filter.page is not None:
            rows = filter.page.apply(rows)
        return projection.apply(rows)

    # ── Test helpers ─────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._records)
