"""Collection decorators customising the behaviour of a datasource."""

from .decorators import (
    CollectionDecorator,
    DatasourceDecorator,
    FullScan,
    SortEmulationCollection,
    SortMode,
    Substituted,
)

__all__ = [
    "CollectionDecorator",
    "DatasourceDecorator",
    "SortEmulationCollection",
    "SortMode",
    "Substituted",
    "FullScan",
]
