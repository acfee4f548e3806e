from .collection import Collection, Datasource
from .condition_tree import ConditionTree, ConditionTreeBranch, ConditionTreeLeaf
from .evaluator import (
    DEFAULT_MEMORY_REGISTRY,
    MemoryOperatorRegistry,
    build_default_registry,
    like_to_regex,
)
from .exceptions import (
    CollectionNotFoundError,
    DatasourceToolkitError,
    FieldNotFoundError,
    InvalidAggregatorError,
    InvalidConditionsError,
    InvalidConditionTreeError,
    RelationNotFoundError,
    SchemaError,
    UnexpectedFieldTypeError,
    UnsupportedDialectError,
    UnsupportedError,
    UnsupportedOperatorError,
    ValidationError,
)
from .field_path import SEPARATOR, FieldPath
from .filter import PaginatedFilter
from .memory import MemoryCollection
from .operators import Aggregator, Operator
from .page import Page
from .projection import Projection
from .records import RecordData, get_field_value
from .schema import (
    CollectionSchema,
    ColumnSchema,
    FieldSchema,
    FieldType,
    ManyToManySchema,
    ManyToOneSchema,
    OneToManySchema,
    OneToOneSchema,
)
from .sort import Sort, SortClause
from .validation import validate_field

__all__ = [
    # Query description
    "Operator",
    "Aggregator",
    "ConditionTree",
    "ConditionTreeLeaf",
    "ConditionTreeBranch",
    "Projection",
    "Sort",
    "SortClause",
    "Page",
    "PaginatedFilter",
    "FieldPath",
    "SEPARATOR",
    # Schema
    "FieldType",
    "FieldSchema",
    "ColumnSchema",
    "ManyToOneSchema",
    "OneToOneSchema",
    "OneToManySchema",
    "ManyToManySchema",
    "CollectionSchema",
    # Collections
    "Collection",
    "Datasource",
    "MemoryCollection",
    "validate_field",
    # Records
    "RecordData",
    "get_field_value",
    # Evaluator
    "MemoryOperatorRegistry",
    "build_default_registry",
    "DEFAULT_MEMORY_REGISTRY",
    "like_to_regex",
    # Exceptions
    "DatasourceToolkitError",
    "ValidationError",
    "InvalidConditionTreeError",
    "InvalidAggregatorError",
    "InvalidConditionsError",
    "UnsupportedOperatorError",
    "UnsupportedDialectError",
    "SchemaError",
    "FieldNotFoundError",
    "RelationNotFoundError",
    "CollectionNotFoundError",
    "UnexpectedFieldTypeError",
    "UnsupportedError",
]
