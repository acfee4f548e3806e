"""
Set operators for SQLAlchemy: in, not_in, includes_all.

``None`` never takes part in an SQL ``IN`` list (``x IN (NULL)`` is never
true), so In and NotIn split it out into an explicit null check.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import ARRAY, and_, literal, or_

from datasource_toolkit.operators import Operator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


def _split_nulls(value: Any) -> tuple[list[Any], bool]:
    values = list(value) if isinstance(value, list | tuple | set | frozenset) else [value]
    non_null = [v for v in values if v is not None]
    return non_null, len(non_null) != len(values)


class InOperator(SQLAlchemyOperator):
    @property
    def name(self) -> Operator:
        return Operator.IN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        values, has_null = _split_nulls(value)

        if len(values) == 1:
            expr = column == values[0]
        elif values or not has_null:
            expr = column.in_(values)
        else:
            expr = None

        if not has_null:
            return cast("ColumnElement[bool]", expr)
        if expr is None:
            return cast("ColumnElement[bool]", column.is_(None))
        return or_(expr, column.is_(None))


class NotInOperator(SQLAlchemyOperator):
    @property
    def name(self) -> Operator:
        return Operator.NOT_IN

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        values, has_null = _split_nulls(value)

        if len(values) == 1:
            expr = column != values[0]
        elif values or not has_null:
            expr = column.not_in(values)
        else:
            expr = None

        if not has_null:
            return cast("ColumnElement[bool]", expr)
        if expr is None:
            return cast("ColumnElement[bool]", column != None)  # noqa: E711
        return and_(column != None, expr)  # noqa: E711


class IncludesAllOperator(SQLAlchemyOperator):
    """Array containment: ``column @> ARRAY[...]``."""

    @property
    def name(self) -> Operator:
        return Operator.INCLUDES_ALL

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        array_type = column.type if isinstance(column.type, ARRAY) else ARRAY(column.type)
        return cast(
            "ColumnElement[bool]",
            column.op("@>", is_comparison=True)(literal(list(value), type_=array_type)),
        )
