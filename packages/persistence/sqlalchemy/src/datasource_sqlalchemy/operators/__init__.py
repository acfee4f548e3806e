"""
SQLAlchemy operator implementations and default registry.

Usage::

    from datasource_sqlalchemy.operators import DEFAULT_SQLA_REGISTRY

    expr = DEFAULT_SQLA_REGISTRY.apply(Operator.LIKE, column, "A%", Dialect.SQLITE)
"""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
from .null import MissingOperator, PresentOperator
from .set import IncludesAllOperator, InOperator, NotInOperator
from .standard import (
    EqualOperator,
    GreaterThanOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import (
    BinaryContainsOperator,
    BinaryLikeOperator,
    BinaryNotContainsOperator,
    CollationILikeOperator,
    ContainsOperator,
    GlobContainsOperator,
    GlobLikeOperator,
    GlobNotContainsOperator,
    ILikeOperator,
    LikeOperator,
    LowerILikeOperator,
    NotContainsOperator,
    glob_pattern,
)


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with all built-in SQLAlchemy operators."""
    registry = SQLAlchemyOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        LessThanOperator(),
        # Null
        PresentOperator(),
        MissingOperator(),
        # Set
        InOperator(),
        NotInOperator(),
        IncludesAllOperator(),
        # String
        LikeOperator(),
        BinaryLikeOperator(),
        GlobLikeOperator(),
        ILikeOperator(),
        CollationILikeOperator(),
        LowerILikeOperator(),
        ContainsOperator(),
        BinaryContainsOperator(),
        GlobContainsOperator(),
        NotContainsOperator(),
        BinaryNotContainsOperator(),
        GlobNotContainsOperator(),
    )
    return registry


DEFAULT_SQLA_REGISTRY: SQLAlchemyOperatorRegistry = build_default_sqla_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "build_default_sqla_registry",
    "glob_pattern",
    "SQLAlchemyOperatorRegistry",
]
