from .collection_decorator import CollectionDecorator
from .datasource_decorator import DatasourceDecorator
from .sort_emulation import FullScan, SortEmulationCollection, SortMode, Substituted

__all__ = [
    "CollectionDecorator",
    "DatasourceDecorator",
    "SortEmulationCollection",
    "SortMode",
    "Substituted",
    "FullScan",
]
