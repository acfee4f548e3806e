from __future__ import annotations

from typing import Generic, TypeVar, cast

from datasource_toolkit.collection import Datasource

from .collection_decorator import CollectionDecorator

D = TypeVar("D", bound=CollectionDecorator)


class DatasourceDecorator(Datasource, Generic[D]):
    """Wraps every collection of *child_datasource* with *decorator_cls*."""

    def __init__(self, child_datasource: Datasource, decorator_cls: type[D]) -> None:
        super().__init__()
        self.child_datasource = child_datasource
        for collection in child_datasource.collections:
            self.add_collection(decorator_cls(collection, self))

    def get_collection(self, name: str) -> D:
        return cast("D", super().get_collection(name))
