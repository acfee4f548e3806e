"""Tests for condition trees and the in-memory operator registry."""

from __future__ import annotations

import pytest

from datasource_toolkit.condition_tree import ConditionTreeBranch, ConditionTreeLeaf
from datasource_toolkit.evaluator import like_to_regex
from datasource_toolkit.exceptions import (
    InvalidAggregatorError,
    InvalidConditionsError,
    UnsupportedOperatorError,
)
from datasource_toolkit.operators import Aggregator, Operator

BOOK = {"id": 1, "title": "Foundation", "tags": ["sf", "classic"], "author": {"name": "Asimov"}}


class TestConditionTreeConstruction:
    def test_leaf_coerces_operator_string(self) -> None:
        leaf = ConditionTreeLeaf("title", "Equal", "Foundation")

        assert leaf.operator is Operator.EQUAL

    def test_leaf_keeps_unknown_operator(self) -> None:
        leaf = ConditionTreeLeaf("title", "__nonExisting__")

        assert leaf.operator == "__nonExisting__"

    def test_branch_coerces_aggregator_and_list(self) -> None:
        branch = ConditionTreeBranch("Or", [ConditionTreeLeaf("id", Operator.PRESENT)])

        assert branch.aggregator is Aggregator.OR
        assert isinstance(branch.conditions, tuple)

    def test_projection_collects_every_leaf(self) -> None:
        tree = ConditionTreeBranch(
            Aggregator.AND,
            [
                ConditionTreeLeaf("title", Operator.PRESENT),
                ConditionTreeBranch(
                    Aggregator.OR,
                    [
                        ConditionTreeLeaf("author:name", Operator.EQUAL, "x"),
                        ConditionTreeLeaf("title", Operator.MISSING),
                    ],
                ),
            ],
        )

        assert tuple(tree.projection) == ("title", "author:name")

    def test_nest_and_unnest(self) -> None:
        tree = ConditionTreeBranch(
            Aggregator.AND,
            [ConditionTreeLeaf("name", Operator.EQUAL, "Asimov")],
        )

        nested = tree.nest("author")

        assert nested.conditions[0].field == "author:name"
        assert nested.unnest() == tree

    def test_unnest_rejects_local_leaf(self) -> None:
        with pytest.raises(ValueError, match="Cannot unnest"):
            ConditionTreeLeaf("name", Operator.PRESENT).unnest()


class TestConditionTreeMatch:
    def test_branch_and_or(self) -> None:
        equal = ConditionTreeLeaf("title", Operator.EQUAL, "Foundation")
        other = ConditionTreeLeaf("title", Operator.EQUAL, "Gomorrah")

        assert ConditionTreeBranch(Aggregator.AND, [equal, other]).match(BOOK) is False
        assert ConditionTreeBranch(Aggregator.OR, [equal, other]).match(BOOK) is True

    def test_empty_branch_and_matches(self) -> None:
        assert ConditionTreeBranch(Aggregator.AND, []).match(BOOK) is True

    def test_relation_path(self) -> None:
        leaf = ConditionTreeLeaf("author:name", Operator.CONTAINS, "sim")

        assert leaf.match(BOOK) is True
        assert leaf.match({"author": None}) is False

    def test_invalid_aggregator(self) -> None:
        branch = ConditionTreeBranch(None, [])

        with pytest.raises(InvalidAggregatorError, match=r"Invalid \(None\) aggregator."):
            branch.match(BOOK)

    def test_invalid_conditions(self) -> None:
        branch = ConditionTreeBranch(Aggregator.AND, None)

        with pytest.raises(InvalidConditionsError, match="Conditions must be an array."):
            branch.match(BOOK)

    def test_unknown_operator(self) -> None:
        leaf = ConditionTreeLeaf("title", "__nonExisting__")

        with pytest.raises(UnsupportedOperatorError, match='Unsupported operator: "__nonExisting__".'):
            leaf.match(BOOK)

    def test_apply_filters_records(self) -> None:
        rows = [{"id": 1}, {"id": 2}, {"id": 3}]

        result = ConditionTreeLeaf("id", Operator.IN, [1, 3]).apply(rows)

        assert result == [{"id": 1}, {"id": 3}]


class TestMemoryOperators:
    @pytest.mark.parametrize(
        ("operator", "field_value", "condition_value", "expected"),
        [
            (Operator.EQUAL, "a", "a", True),
            (Operator.EQUAL, None, None, True),
            (Operator.NOT_EQUAL, "a", "b", True),
            (Operator.GREATER_THAN, 3, 2, True),
            (Operator.GREATER_THAN, None, 2, False),
            (Operator.LESS_THAN, 1, 2, True),
            (Operator.IN, None, [None, 1], True),
            (Operator.NOT_IN, 2, [None, 1], True),
            (Operator.INCLUDES_ALL, ["sf", "classic"], ["sf"], True),
            (Operator.INCLUDES_ALL, ["sf"], ["sf", "classic"], False),
            (Operator.PRESENT, 0, None, True),
            (Operator.MISSING, None, None, True),
            (Operator.LIKE, "Foundation", "Found%", True),
            (Operator.LIKE, "Foundation", "found%", False),
            (Operator.ILIKE, "Foundation", "found%", True),
            (Operator.LIKE, "cat", "c_t", True),
            (Operator.CONTAINS, "Foundation", "dati", True),
            (Operator.NOT_CONTAINS, "Foundation", "Dati", True),
        ],
    )
    def test_evaluate(self, registry, operator, field_value, condition_value, expected) -> None:
        assert registry.evaluate(operator, field_value, condition_value) is expected

    def test_like_escapes_regex_characters(self) -> None:
        assert like_to_regex("a.b%", True).fullmatch("a.bc") is not None
        assert like_to_regex("a.b%", True).fullmatch("axbc") is None

    def test_has(self, registry) -> None:
        assert registry.has(Operator.ILIKE)
