"""SQL dialect identification for the operator matrix."""

from __future__ import annotations

from enum import Enum
from typing import Any

from datasource_toolkit.exceptions import UnsupportedDialectError


class Dialect(str, Enum):
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    MSSQL = "mssql"
    SQLITE = "sqlite"


_ALIASES: dict[str, Dialect] = {
    "postgres": Dialect.POSTGRES,
    "postgresql": Dialect.POSTGRES,
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MARIADB,
    "mssql": Dialect.MSSQL,
    "sqlite": Dialect.SQLITE,
}


def resolve_dialect(dialect: Any) -> Dialect:
    """
    Normalise *dialect* to a :class:`Dialect`.

    Accepts a :class:`Dialect`, a name (``"postgresql"``, ``"mariadb"``...),
    a SQLAlchemy ``Dialect`` or anything with a ``.dialect`` attribute
    (``Engine``, ``AsyncEngine``, ``Connection``).  MariaDB servers reached
    through the ``mysql`` dialect are recognised by ``is_mariadb``.

    Raises:
        UnsupportedDialectError: The dialect has no operator translation.
    """
    if isinstance(dialect, Dialect):
        return dialect

    if not isinstance(dialect, str):
        sqla_dialect = getattr(dialect, "dialect", dialect)
        name = getattr(sqla_dialect, "name", None)
        if name is None:
            raise UnsupportedDialectError(dialect, [d.value for d in Dialect])
        if getattr(sqla_dialect, "is_mariadb", False):
            return Dialect.MARIADB
        dialect = name

    try:
        return _ALIASES[dialect.lower()]
    except KeyError:
        raise UnsupportedDialectError(dialect, [d.value for d in Dialect]) from None
