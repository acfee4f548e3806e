"""
In-memory operator evaluation.

Maps each :class:`Operator` to a predicate ``(field_value, condition_value)
-> bool``.  Used by :meth:`ConditionTree.match` and by the in-memory
collection adapter.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from .exceptions import UnsupportedOperatorError
from .operators import Operator

if TYPE_CHECKING:
    from collections.abc import Callable


@lru_cache(maxsize=256)
def like_to_regex(pattern: str, case_sensitive: bool) -> re.Pattern[str]:
    """Translate a SQL LIKE pattern (``%`` and ``_`` wildcards) to a regex."""
    parts = [
        ".*" if char == "%" else "." if char == "_" else re.escape(char)
        for char in pattern
    ]
    flags = re.DOTALL if case_sensitive else re.DOTALL | re.IGNORECASE
    return re.compile("".join(parts), flags)


def _like(value: Any, pattern: Any, *, case_sensitive: bool) -> bool:
    if value is None or pattern is None:
        return False
    return like_to_regex(str(pattern), case_sensitive).fullmatch(str(value)) is not None


def _compare(value: Any, other: Any, check: Callable[[Any, Any], bool]) -> bool:
    if value is None or other is None:
        return False
    return check(value, other)


def _includes_all(value: Any, expected: Any) -> bool:
    if value is None:
        return False
    return all(item in value for item in expected)


def _contains(value: Any, needle: Any) -> bool:
    return value is not None and str(needle) in str(value)


class MemoryOperatorRegistry:
    """
    Registry of predicates keyed by :class:`Operator`.

    Usage::

        registry = build_default_registry()
        registry.evaluate(Operator.IN, "a", ["a", "b"])  # True
    """

    def __init__(self) -> None:
        self._predicates: dict[Operator, Callable[[Any, Any], bool]] = {}

    def register(self, operator: Operator, predicate: Callable[[Any, Any], bool]) -> None:
        self._predicates[operator] = predicate

    def has(self, operator: Operator) -> bool:
        return operator in self._predicates

    def evaluate(self, operator: Operator | str, field_value: Any, condition_value: Any) -> bool:
        try:
            predicate = self._predicates[Operator(operator)]
        except (KeyError, ValueError):
            raise UnsupportedOperatorError(operator) from None
        return predicate(field_value, condition_value)


def build_default_registry() -> MemoryOperatorRegistry:
    """Create a registry with every built-in operator."""
    registry = MemoryOperatorRegistry()
    table: dict[Operator, Callable[[Any, Any], bool]] = {
        Operator.EQUAL: lambda v, c: v == c,
        Operator.NOT_EQUAL: lambda v, c: v != c,
        Operator.GREATER_THAN: lambda v, c: _compare(v, c, lambda a, b: a > b),
        Operator.LESS_THAN: lambda v, c: _compare(v, c, lambda a, b: a < b),
        Operator.IN: lambda v, c: v in c,
        Operator.NOT_IN: lambda v, c: v not in c,
        Operator.INCLUDES_ALL: _includes_all,
        Operator.PRESENT: lambda v, _c: v is not None,
        Operator.MISSING: lambda v, _c: v is None,
        Operator.LIKE: lambda v, c: _like(v, c, case_sensitive=True),
        Operator.ILIKE: lambda v, c: _like(v, c, case_sensitive=False),
        Operator.CONTAINS: _contains,
        Operator.NOT_CONTAINS: lambda v, c: not _contains(v, c),
    }
    for operator, predicate in table.items():
        registry.register(operator, predicate)
    return registry


DEFAULT_MEMORY_REGISTRY: MemoryOperatorRegistry = build_default_registry()
