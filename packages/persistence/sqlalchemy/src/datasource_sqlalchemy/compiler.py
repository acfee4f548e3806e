"""
Compile condition trees, sorts and projections into SQLAlchemy constructs.

Uses the strategy pattern: each operator is an isolated class in
``operators/``, registered in a ``SQLAlchemyOperatorRegistry`` keyed by
operator and dialect.  ``QueryConverter`` walks the condition tree and
delegates leaf compilation to the registry.

Relations
---------
Paths through relations (``author:lastName``) are compiled against
``aliased()`` entities named after the hops (``"author"."last_name"``).
One converter keeps one alias per hop chain, so the statement has to be
built with the same converter: ``apply_include`` for the joins,
``build_where`` for the filter, ``order_by_clauses`` for the ordering.

``build_where_bypassing_joins`` trades the joins for one primary-key
lookup, for callers that cannot add joins to their final statement.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal, NamedTuple, cast

from sqlalchemy import and_, asc, desc, false, or_, select, true

from datasource_toolkit.condition_tree import (
    ConditionTree,
    ConditionTreeBranch,
    ConditionTreeLeaf,
)
from datasource_toolkit.exceptions import (
    InvalidAggregatorError,
    InvalidConditionsError,
    InvalidConditionTreeError,
)
from datasource_toolkit.field_path import FieldPath
from datasource_toolkit.operators import Aggregator
from datasource_toolkit.projection import Projection

from .dialects import resolve_dialect
from .include import IncludeNode, build_include_tree
from .operators import DEFAULT_SQLA_REGISTRY
from .resolver import FieldResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql.elements import UnaryExpression

    from datasource_toolkit.sort import Sort

    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger("datasource.sqlalchemy")


class OrderClause(NamedTuple):
    field: str
    direction: Literal["ASC", "DESC"]


class QueryConverter:
    """
    Per-request compiler bound to one root model.

    Args:
        model: The SQLAlchemy declarative model of the collection.
        dialect: Dialect name, SQLAlchemy ``Dialect`` or engine.  ``None``
            uses the dialect-agnostic operator translations.
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.
    """

    def __init__(
        self,
        model: type[Any],
        *,
        dialect: Any = None,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self.model = model
        self.dialect = resolve_dialect(dialect) if dialect is not None else None
        self.registry = registry or DEFAULT_SQLA_REGISTRY
        self.resolver = FieldResolver(model)

    # -- Filtering ------------------------------------------------------------

    def build_where(self, tree: ConditionTree | None) -> ColumnElement[bool]:
        """
        Compile *tree* to a boolean expression.

        ``None`` compiles to ``true()``, the neutral element of ``and_``.

        Raises:
            InvalidConditionTreeError: A node is neither a leaf nor a branch.
            InvalidAggregatorError: A branch aggregator is not ``And``/``Or``.
            InvalidConditionsError: A branch has no list of conditions.
            UnsupportedOperatorError: A leaf operator cannot be translated.
            SchemaError: A leaf path does not match the model.
        """
        if tree is None:
            return true()
        return self._compile_node(tree)

    async def build_where_bypassing_joins(
        self, tree: ConditionTree | None, session: AsyncSession
    ) -> ColumnElement[bool]:
        """
        Compile *tree* to a filter on the root primary keys only.

        Trees touching relations are run once as
        ``SELECT <pks> FROM root LEFT OUTER JOIN ... WHERE <tree>``; the
        result becomes ``(pk = v AND ...) OR ...``.  No match gives
        ``false()``.  Local-only trees are compiled without any I/O.
        """
        where = self.build_where(tree)
        if not isinstance(tree, ConditionTree) or not tree.projection.relations:
            return where

        primary_keys = self.resolver.primary_keys()
        if not primary_keys:
            return false()

        stmt = select(*primary_keys).select_from(self.model)
        stmt = self.apply_include(stmt, self.build_include(Projection(), tree.projection))
        stmt = stmt.where(where)

        rows = (await session.execute(stmt)).all()
        logger.debug(
            "Resolved relation filter on %s to %d primary key(s)",
            self.model.__name__,
            len(rows),
        )
        if not rows:
            return false()
        return or_(
            *(
                and_(*(column == value for column, value in zip(primary_keys, row)))
                for row in rows
            )
        )

    def _compile_node(self, node: Any) -> ColumnElement[bool]:
        if isinstance(node, ConditionTreeBranch):
            return self._compile_branch(node)
        if isinstance(node, ConditionTreeLeaf):
            return self._compile_leaf(node)
        raise InvalidConditionTreeError()

    def _compile_branch(self, branch: ConditionTreeBranch) -> ColumnElement[bool]:
        if branch.aggregator not in (Aggregator.AND, Aggregator.OR):
            raise InvalidAggregatorError(branch.aggregator)
        if not isinstance(branch.conditions, list | tuple):
            raise InvalidConditionsError()

        clauses = [self._compile_node(child) for child in branch.conditions]
        if not clauses:
            return true()
        if len(clauses) == 1:
            return clauses[0]
        if branch.aggregator == Aggregator.AND:
            return and_(*clauses)
        return or_(*clauses)

    def _compile_leaf(self, leaf: ConditionTreeLeaf) -> ColumnElement[bool]:
        column = self.resolver.resolve(leaf.field)
        return self.registry.apply(leaf.operator, column, leaf.value, self.dialect)

    # -- Ordering -------------------------------------------------------------

    def build_order(self, sort: Sort | None) -> list[OrderClause]:
        """Sort clauses as ``(qualified physical column, "ASC" | "DESC")``."""
        return [
            OrderClause(
                self.resolver.physical_name(clause.field),
                "ASC" if clause.ascending else "DESC",
            )
            for clause in sort or ()
        ]

    def order_by_clauses(self, sort: Sort | None) -> list[UnaryExpression[Any]]:
        return [
            (asc if clause.ascending else desc)(self.resolver.resolve(clause.field))
            for clause in sort or ()
        ]

    # -- Joins ----------------------------------------------------------------

    def build_include(
        self, projection: Iterable[str], join_only: Iterable[str] | None = None
    ) -> tuple[IncludeNode, ...]:
        return build_include_tree(projection, join_only)

    def apply_include(
        self, stmt: Select[Any], include: Iterable[IncludeNode]
    ) -> Select[Any]:
        """
        Add a ``LEFT OUTER JOIN`` per include node and select its attributes.

        Joins use this converter's aliases, so filters and ordering built by
        the same converter reference the joined entities.
        """
        return self._apply_include(stmt, include, ())

    def _apply_include(
        self,
        stmt: Select[Any],
        include: Iterable[IncludeNode],
        prefix: tuple[str, ...],
    ) -> Select[Any]:
        parent = self.resolver.alias(prefix)
        for node in include:
            relations = (*prefix, node.association)
            target = self.resolver.alias(relations)
            stmt = stmt.outerjoin(getattr(parent, node.association).of_type(target))
            if node.attributes:
                stmt = stmt.add_columns(
                    *(
                        self.resolver.resolve(FieldPath((*relations, attribute)))
                        for attribute in node.attributes
                    )
                )
            stmt = self._apply_include(stmt, node.include, relations)
        return cast("Select[Any]", stmt)
