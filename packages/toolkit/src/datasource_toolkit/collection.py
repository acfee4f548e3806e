"""Collection and Datasource - the ports the compilers and decorators work against."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .exceptions import CollectionNotFoundError

if TYPE_CHECKING:
    import builtins
    from collections.abc import Iterable

    from .filter import PaginatedFilter
    from .projection import Projection
    from .records import RecordData
    from .schema import CollectionSchema


@runtime_checkable
class Collection(Protocol):
    """
    A named set of records with a typed schema.

    ``list`` returns plain dicts shaped by the projection; relations are
    nested dicts (``{"author": {"lastName": "Asimov"}}``).
    """

    @property
    def name(self) -> str: ...

    @property
    def schema(self) -> CollectionSchema: ...

    @property
    def datasource(self) -> Datasource: ...

    async def list(
        self, filter: PaginatedFilter, projection: Projection
    ) -> builtins.list[RecordData]: ...


class Datasource:
    """Registry of collections by name."""

    def __init__(self, collections: Iterable[Collection] = ()) -> None:
        self._collections: dict[str, Collection] = {}
        for collection in collections:
            self.add_collection(collection)

    @property
    def collections(self) -> list[Collection]:
        return list(self._collections.values())

    def add_collection(self, collection: Collection) -> None:
        if collection.name in self._collections:
            raise ValueError(f"Collection '{collection.name}' already defined in datasource")
        self._collections[collection.name] = collection

    def get_collection(self, name: str) -> Collection:
        try:
            return self._collections[name]
        except KeyError:
            raise CollectionNotFoundError(name) from None
