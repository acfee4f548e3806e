from .compiler import OrderClause, QueryConverter
from .dialects import Dialect, resolve_dialect
from .include import IncludeNode, build_include_tree
from .operators import DEFAULT_SQLA_REGISTRY, build_default_sqla_registry
from .resolver import FieldResolver
from .strategy import SQLAlchemyOperator, SQLAlchemyOperatorRegistry

__all__ = [
    "QueryConverter",
    "OrderClause",
    "IncludeNode",
    "build_include_tree",
    "FieldResolver",
    # Dialects
    "Dialect",
    "resolve_dialect",
    # Operator strategy
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
]
