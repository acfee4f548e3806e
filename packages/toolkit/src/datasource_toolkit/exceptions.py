"""
Toolkit exception hierarchy.

All exceptions inherit from ``DatasourceToolkitError`` and provide
``to_dict()`` for API-friendly error responses.  None of them is recovered
internally: the caller has to fix the request.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class DatasourceToolkitError(Exception):
    """Base exception for all datasource toolkit errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(DatasourceToolkitError):
    """A query description (condition tree, sort, ...) is malformed."""


class InvalidConditionTreeError(ValidationError):
    """The node is neither a leaf nor a branch."""

    def __init__(self, message: str = "Invalid ConditionTree.") -> None:
        super().__init__(message)


class InvalidAggregatorError(ValidationError):
    """A branch aggregator is missing or is not ``And``/``Or``."""

    def __init__(self, aggregator: Any) -> None:
        self.aggregator = aggregator
        super().__init__(f"Invalid ({aggregator}) aggregator.")


class InvalidConditionsError(ValidationError):
    """A branch carries something other than a sequence of conditions."""

    def __init__(self, message: str = "Conditions must be an array.") -> None:
        super().__init__(message)


class UnsupportedOperatorError(ValidationError):
    """Operator outside the fixed enumeration (or not compiled for a dialect)."""

    def __init__(self, operator: Any) -> None:
        self.operator = operator
        super().__init__(f'Unsupported operator: "{operator}".')

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_OPERATOR",
            "operator": str(self.operator),
        }


class UnsupportedDialectError(ValidationError):
    """The SQL dialect has no operator translation."""

    def __init__(self, dialect: Any, supported: list[str]) -> None:
        self.dialect = dialect
        self.supported = supported
        super().__init__(
            f"Unsupported dialect: '{dialect}'. "
            f"Supported dialects: {', '.join(sorted(supported))}"
        )


class SchemaError(DatasourceToolkitError):
    """A field path or customisation does not match the collection schema."""


class FieldNotFoundError(SchemaError):
    """
    Unknown field with fuzzy-matched suggestions.

    The message stays short (``Column not found: 'books.titel'``); the
    suggestions are exposed through ``to_dict()``.
    """

    kind = "Column"

    def __init__(
        self,
        collection: str,
        field: str,
        available_fields: list[str] | None = None,
    ) -> None:
        self.collection = collection
        self.field = field
        self.available_fields = sorted(available_fields or [])
        self.suggestions = get_close_matches(
            field, self.available_fields, n=3, cutoff=0.6
        )
        super().__init__(f"{self.kind} not found: '{collection}.{field}'")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "collection": self.collection,
            "field": self.field,
            "suggestions": self.suggestions,
            "available_fields": self.available_fields,
        }


class RelationNotFoundError(FieldNotFoundError):
    """Unknown relation while traversing a path."""

    kind = "Relation"


class CollectionNotFoundError(SchemaError):
    """The datasource has no collection with that name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Collection '{name}' not found.")


class UnexpectedFieldTypeError(SchemaError):
    """A field exists but has the wrong kind (column vs relation)."""

    def __init__(self, collection: str, field: str, found: str, expected: str) -> None:
        self.collection = collection
        self.field = field
        self.found = found
        self.expected = expected
        super().__init__(
            f"Unexpected field type: '{collection}.{field}' "
            f"(found '{found}' expected '{expected}')"
        )


class UnsupportedError(SchemaError):
    """The customisation cannot be applied to this field."""
