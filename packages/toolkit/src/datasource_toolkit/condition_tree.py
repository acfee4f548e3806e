"""
Condition trees: leaves ``(field, operator, value)`` combined by branches.

Trees are frozen dataclasses.  A branch accepts a ``None`` aggregator or
non-list conditions at construction; they are rejected when the tree is
evaluated or compiled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from .evaluator import DEFAULT_MEMORY_REGISTRY
from .exceptions import InvalidAggregatorError, InvalidConditionsError
from .field_path import FieldPath
from .operators import Aggregator, Operator
from .projection import Projection
from .records import get_field_value

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from .evaluator import MemoryOperatorRegistry
    from .records import RecordData


class ConditionTree(ABC):
    """Common interface of leaves and branches."""

    @property
    @abstractmethod
    def projection(self) -> Projection:
        """Every field path the tree reads, in first-seen order."""

    @abstractmethod
    def match(
        self,
        record: RecordData,
        registry: MemoryOperatorRegistry = DEFAULT_MEMORY_REGISTRY,
    ) -> bool: ...

    @abstractmethod
    def every_leaf(self, predicate: Callable[[ConditionTreeLeaf], bool]) -> bool: ...

    @abstractmethod
    def replace_leafs(
        self, handler: Callable[[ConditionTreeLeaf], ConditionTree]
    ) -> ConditionTree: ...

    def apply(
        self,
        records: Iterable[RecordData],
        registry: MemoryOperatorRegistry = DEFAULT_MEMORY_REGISTRY,
    ) -> list[RecordData]:
        return [record for record in records if self.match(record, registry)]

    def nest(self, prefix: str | None) -> ConditionTree:
        if not prefix:
            return self
        return self.replace_leafs(
            lambda leaf: replace(leaf, field=str(FieldPath.parse(leaf.field).nest(prefix)))
        )

    def unnest(self) -> ConditionTree:
        """Strip the common first relation of every leaf."""
        heads: set[str] = set()

        def collect(leaf: ConditionTreeLeaf) -> bool:
            path = FieldPath.parse(leaf.field)
            heads.add(path.head)
            return not path.is_local

        if not self.every_leaf(collect) or len(heads) != 1:
            raise ValueError("Cannot unnest condition tree.")
        return self.replace_leafs(
            lambda leaf: replace(leaf, field=str(FieldPath.parse(leaf.field).tail))
        )


@dataclass(frozen=True)
class ConditionTreeLeaf(ConditionTree):
    field: str
    operator: Operator | str
    value: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.operator, Operator) and self.operator in _OPERATOR_VALUES:
            object.__setattr__(self, "operator", Operator(self.operator))

    @property
    def projection(self) -> Projection:
        return Projection(self.field)

    def match(
        self,
        record: RecordData,
        registry: MemoryOperatorRegistry = DEFAULT_MEMORY_REGISTRY,
    ) -> bool:
        return registry.evaluate(
            self.operator, get_field_value(record, self.field), self.value
        )

    def every_leaf(self, predicate: Callable[[ConditionTreeLeaf], bool]) -> bool:
        return predicate(self)

    def replace_leafs(
        self, handler: Callable[[ConditionTreeLeaf], ConditionTree]
    ) -> ConditionTree:
        return handler(self)


@dataclass(frozen=True)
class ConditionTreeBranch(ConditionTree):
    aggregator: Aggregator | str | None
    conditions: Sequence[ConditionTree] | None

    def __post_init__(self) -> None:
        if isinstance(self.aggregator, str) and self.aggregator in _AGGREGATOR_VALUES:
            object.__setattr__(self, "aggregator", Aggregator(self.aggregator))
        if isinstance(self.conditions, list):
            object.__setattr__(self, "conditions", tuple(self.conditions))

    @property
    def projection(self) -> Projection:
        return Projection().union(*(c.projection for c in self._children()))

    def match(
        self,
        record: RecordData,
        registry: MemoryOperatorRegistry = DEFAULT_MEMORY_REGISTRY,
    ) -> bool:
        results = (child.match(record, registry) for child in self._children())
        if self.aggregator == Aggregator.AND:
            return all(results)
        if self.aggregator == Aggregator.OR:
            return any(results)
        raise InvalidAggregatorError(self.aggregator)

    def every_leaf(self, predicate: Callable[[ConditionTreeLeaf], bool]) -> bool:
        return all(child.every_leaf(predicate) for child in self._children())

    def replace_leafs(
        self, handler: Callable[[ConditionTreeLeaf], ConditionTree]
    ) -> ConditionTree:
        return ConditionTreeBranch(
            self.aggregator,
            tuple(child.replace_leafs(handler) for child in self._children()),
        )

    def _children(self) -> tuple[ConditionTree, ...]:
        if not isinstance(self.conditions, tuple):
            raise InvalidConditionsError()
        return self.conditions


_OPERATOR_VALUES = frozenset(m.value for m in Operator)
_AGGREGATOR_VALUES = frozenset(m.value for m in Aggregator)
