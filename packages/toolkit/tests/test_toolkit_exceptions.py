"""Tests for the toolkit exception hierarchy."""

from __future__ import annotations

from datasource_toolkit.exceptions import (
    DatasourceToolkitError,
    FieldNotFoundError,
    InvalidConditionTreeError,
    RelationNotFoundError,
    SchemaError,
    UnsupportedDialectError,
    UnsupportedOperatorError,
    ValidationError,
)


def test_hierarchy():
    assert issubclass(ValidationError, DatasourceToolkitError)
    assert issubclass(SchemaError, DatasourceToolkitError)
    assert issubclass(UnsupportedOperatorError, ValidationError)
    assert issubclass(RelationNotFoundError, FieldNotFoundError)


def test_invalid_condition_tree_default_message():
    assert str(InvalidConditionTreeError()) == "Invalid ConditionTree."


def test_unsupported_operator_to_dict():
    err = UnsupportedOperatorError("Between")

    assert str(err) == 'Unsupported operator: "Between".'
    assert err.to_dict() == {"error": "UNSUPPORTED_OPERATOR", "operator": "Between"}


def test_unsupported_dialect_lists_supported():
    err = UnsupportedDialectError("oracle", ["sqlite", "postgres"])

    assert "'oracle'" in str(err)
    assert "postgres, sqlite" in str(err)


def test_field_not_found_suggestions():
    err = FieldNotFoundError("books", "titel", ["title", "id", "author"])

    assert str(err) == "Column not found: 'books.titel'"
    d = err.to_dict()
    assert d["error"] == "FIELD_NOT_FOUND"
    assert "title" in d["suggestions"]
    assert d["available_fields"] == ["author", "id", "title"]


def test_relation_not_found_message():
    assert str(RelationNotFoundError("books", "autor")) == "Relation not found: 'books.autor'"


def test_base_to_dict():
    err = ValidationError("bad")

    assert err.to_dict() == {"error": "ValidationError", "message": "bad"}
