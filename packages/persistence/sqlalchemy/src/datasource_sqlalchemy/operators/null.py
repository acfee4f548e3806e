"""Null check operators for SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from datasource_toolkit.operators import Operator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class MissingOperator(SQLAlchemyOperator):
    @property
    def name(self) -> Operator:
        return Operator.MISSING

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_(None))


class PresentOperator(SQLAlchemyOperator):
    @property
    def name(self) -> Operator:
        return Operator.PRESENT

    def apply(self, column: Any, _value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.is_not(None))
