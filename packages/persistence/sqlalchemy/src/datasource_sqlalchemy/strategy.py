"""
SQLAlchemy operator compilation strategy.

Provides the ``SQLAlchemyOperator`` interface and a registry keyed by
``(Operator, Dialect)``.  An operator registered without dialects is the
default used for every dialect that has no specific translation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from datasource_toolkit.exceptions import UnsupportedOperatorError
from datasource_toolkit.operators import Operator

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from .dialects import Dialect


class SQLAlchemyOperator(ABC):
    """
    Strategy interface for compiling a leaf operator
    into a SQLAlchemy ``ColumnElement[bool]``.

    ``dialects`` lists the dialects the implementation is specific to;
    an empty tuple registers it as the dialect-agnostic default.
    """

    dialects: ClassVar[tuple[Dialect, ...]] = ()

    @property
    @abstractmethod
    def name(self) -> Operator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def apply(
        self,
        column: Any,
        value: Any,
    ) -> ColumnElement[bool]:
        """
        Build a SQLAlchemy filter clause.

        Args:
            column: A SQLAlchemy column or instrumented attribute.
            value: The condition value of the leaf.

        Returns:
            A SQLAlchemy boolean expression.
        """
        ...


class SQLAlchemyOperatorRegistry:
    """
    Registry of ``SQLAlchemyOperator`` instances keyed by
    ``(Operator, Dialect | None)``.
    """

    def __init__(self) -> None:
        self._operators: dict[tuple[Operator, Dialect | None], SQLAlchemyOperator] = {}

    def register(self, operator: SQLAlchemyOperator) -> None:
        for dialect in operator.dialects or (None,):
            self._operators[(operator.name, dialect)] = operator

    def register_all(self, *operators: SQLAlchemyOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: Operator, dialect: Dialect | None = None) -> None:
        self._operators.pop((name, dialect), None)

    def get(self, name: Operator, dialect: Dialect | None = None) -> SQLAlchemyOperator | None:
        return self._operators.get((name, dialect)) or self._operators.get((name, None))

    def has(self, name: Operator, dialect: Dialect | None = None) -> bool:
        return self.get(name, dialect) is not None

    @property
    def supported_operators(self) -> set[Operator]:
        return {name for name, _ in self._operators}

    def apply(
        self,
        name: Operator | str,
        column: Any,
        value: Any,
        dialect: Dialect | None = None,
    ) -> ColumnElement[bool]:
        """
        Look up the operator for *dialect* and apply.

        Raises:
            UnsupportedOperatorError: The operator is outside the enumeration
                or has no translation for this dialect.
        """
        try:
            operator = Operator(name)
        except ValueError:
            raise UnsupportedOperatorError(name) from None
        op = self.get(operator, dialect)
        if op is None:
            raise UnsupportedOperatorError(operator.value)
        return op.apply(column, value)
