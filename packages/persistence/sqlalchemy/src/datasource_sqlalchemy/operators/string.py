"""
String operators for SQLAlchemy.

Case-sensitivity of ``LIKE`` depends on the server: PostgreSQL and SQL
Server (default collation aside) compare as-is, MySQL/MariaDB need a
``BINARY`` cast and SQLite only offers case-sensitive matching through
``GLOB``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func

from datasource_toolkit.operators import Operator

from ..dialects import Dialect
from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


_GLOB_TRANSLATION = {"%": "*", "_": "?", "*": "[*]", "?": "[?]", "[": "[[]"}
_GLOB_TOKENS = re.compile(r"[%_*?\[]")


def glob_pattern(pattern: str) -> str:
    """
    Translate ``LIKE`` wildcards to their ``GLOB`` equivalent.

    Characters ``GLOB`` treats as wildcards (``*``, ``?``, ``[``) are
    bracketed so they match literally.
    """
    return _GLOB_TOKENS.sub(lambda match: _GLOB_TRANSLATION[match.group()], pattern)


# -- Like (case-sensitive) -----------------------------------------------------


class LikeOperator(SQLAlchemyOperator):
    @property
    def name(self) -> Operator:
        return Operator.LIKE

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.like(value))


class BinaryLikeOperator(LikeOperator):
    dialects = (Dialect.MYSQL, Dialect.MARIADB)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", func.BINARY(column).like(value))


class GlobLikeOperator(LikeOperator):
    dialects = (Dialect.SQLITE,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast(
            "ColumnElement[bool]",
            column.op("GLOB", is_comparison=True)(glob_pattern(value)),
        )


# -- ILike (case-insensitive) --------------------------------------------------


class ILikeOperator(SQLAlchemyOperator):
    @property
    def name(self) -> Operator:
        return Operator.ILIKE

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.ilike(value))


class CollationILikeOperator(ILikeOperator):
    """``LIKE`` is already case-insensitive on these servers."""

    dialects = (Dialect.MYSQL, Dialect.MARIADB, Dialect.SQLITE)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.like(value))


class LowerILikeOperator(ILikeOperator):
    dialects = (Dialect.MSSQL,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", func.lower(column).like(value.lower()))


# -- Contains / NotContains ----------------------------------------------------


class ContainsOperator(LikeOperator):
    @property
    def name(self) -> Operator:
        return Operator.CONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return super().apply(column, f"%{value}%")


class BinaryContainsOperator(ContainsOperator, BinaryLikeOperator):
    pass


class GlobContainsOperator(ContainsOperator, GlobLikeOperator):
    pass


class NotContainsOperator(SQLAlchemyOperator):
    @property
    def name(self) -> Operator:
        return Operator.NOT_CONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.not_like(f"%{value}%"))


class BinaryNotContainsOperator(NotContainsOperator):
    dialects = (Dialect.MYSQL, Dialect.MARIADB)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", func.BINARY(column).not_like(f"%{value}%"))


class GlobNotContainsOperator(NotContainsOperator):
    dialects = (Dialect.SQLITE,)

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast(
            "ColumnElement[bool]",
            column.op("NOT GLOB", is_comparison=True)(glob_pattern(f"%{value}%")),
        )
