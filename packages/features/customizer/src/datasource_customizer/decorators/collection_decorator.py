"""CollectionDecorator - base class for behaviour layered over a Collection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from datasource_toolkit.collection import Collection

if TYPE_CHECKING:
    import builtins

    from datasource_toolkit.filter import PaginatedFilter
    from datasource_toolkit.projection import Projection
    from datasource_toolkit.records import RecordData
    from datasource_toolkit.schema import CollectionSchema

    from .datasource_decorator import DatasourceDecorator


class CollectionDecorator(Collection):
    """
    Decorator that forwards every call to the child collection.

    Pattern:
    - schema: child schema -> ``refine_schema``
    - list(filter, projection): delegate to child
    - datasource: the decorating datasource, so that relations resolve to
      decorated siblings

    Subclasses override ``refine_schema`` and/or ``list``.
    """

    def __init__(self, child_collection: Collection, datasource: DatasourceDecorator) -> None:
        self.child_collection = child_collection
        self._datasource = datasource

    @property
    def name(self) -> str:
        return self.child_collection.name

    @property
    def datasource(self) -> DatasourceDecorator:
        return self._datasource

    @property
    def schema(self) -> CollectionSchema:
        return self.refine_schema(self.child_collection.schema)

    def refine_schema(self, child_schema: CollectionSchema) -> CollectionSchema:
        return child_schema

    async def list(
        self, filter: PaginatedFilter, projection: Projection
    ) -> builtins.list[RecordData]:
        return await self.child_collection.list(filter, projection)
