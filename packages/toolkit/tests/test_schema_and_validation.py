"""Tests for schemas, datasource lookup, field validation and MemoryCollection."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter

from datasource_toolkit.collection import Collection, Datasource
from datasource_toolkit.condition_tree import ConditionTreeLeaf
from datasource_toolkit.exceptions import (
    CollectionNotFoundError,
    FieldNotFoundError,
    UnexpectedFieldTypeError,
)
from datasource_toolkit.filter import PaginatedFilter
from datasource_toolkit.memory import MemoryCollection
from datasource_toolkit.operators import Operator
from datasource_toolkit.page import Page
from datasource_toolkit.projection import Projection
from datasource_toolkit.schema import (
    CollectionSchema,
    ColumnSchema,
    FieldSchema,
    ManyToOneSchema,
)
from datasource_toolkit.sort import Sort, SortClause
from datasource_toolkit.validation import validate_field

# -- Schema -------------------------------------------------------------------


def test_field_schema_discriminates_on_type():
    adapter = TypeAdapter(FieldSchema)

    field = adapter.validate_python(
        {"type": "ManyToOne", "foreign_collection": "persons", "foreign_key": "authorId"}
    )

    assert isinstance(field, ManyToOneSchema)


def test_primary_keys():
    schema = CollectionSchema(
        fields={"id": ColumnSchema(is_primary_key=True), "name": ColumnSchema()}
    )

    assert schema.primary_keys == ["id"]


def test_with_sortable_returns_copy():
    schema = CollectionSchema(fields={"title": ColumnSchema(is_sortable=False)})

    refined = schema.with_sortable(["title"])

    assert refined.fields["title"].is_sortable is True
    assert schema.fields["title"].is_sortable is False


# -- Datasource ---------------------------------------------------------------


def test_datasource_lookup(datasource: Datasource):
    books = datasource.get_collection("books")

    assert isinstance(books, Collection)
    assert [c.name for c in datasource.collections] == ["books", "persons"]


def test_datasource_unknown_collection(datasource: Datasource):
    with pytest.raises(CollectionNotFoundError, match="Collection 'movies' not found."):
        datasource.get_collection("movies")


def test_datasource_rejects_duplicates(datasource: Datasource):
    with pytest.raises(ValueError, match="already defined"):
        MemoryCollection("books", datasource, CollectionSchema())


# -- validate_field -----------------------------------------------------------


class TestValidateField:
    def test_valid_local_and_relation_paths(self, datasource: Datasource) -> None:
        books = datasource.get_collection("books")

        validate_field(books, "title")
        validate_field(books, "author:lastName")

    def test_unknown_column(self, datasource: Datasource) -> None:
        books = datasource.get_collection("books")

        with pytest.raises(FieldNotFoundError, match="Column not found: 'books.__dontExist'"):
            validate_field(books, "__dontExist")

    def test_unknown_column_through_relation(self, datasource: Datasource) -> None:
        books = datasource.get_collection("books")

        with pytest.raises(FieldNotFoundError, match="Column not found: 'persons.nme'"):
            validate_field(books, "author:nme")

    def test_relation_used_as_column(self, datasource: Datasource) -> None:
        books = datasource.get_collection("books")

        with pytest.raises(
            UnexpectedFieldTypeError,
            match=r"Unexpected field type: 'books.author' \(found 'ManyToOne' expected 'Column'\)",
        ):
            validate_field(books, "author")

    def test_to_many_relation_cannot_be_traversed(self, datasource: Datasource) -> None:
        persons = datasource.get_collection("persons")

        with pytest.raises(UnexpectedFieldTypeError, match="found 'OneToMany'"):
            validate_field(persons, "books:title")


# -- MemoryCollection ---------------------------------------------------------


@pytest.mark.asyncio
class TestMemoryCollection:
    async def test_list_filters_sorts_pages_and_projects(self, datasource: Datasource) -> None:
        books = datasource.get_collection("books")
        request = PaginatedFilter(
            condition_tree=ConditionTreeLeaf("id", Operator.GREATER_THAN, 1),
            sort=Sort(SortClause("author:lastName")),
            page=Page(skip=0, limit=1),
        )

        rows = await books.list(request, Projection("title", "author:lastName"))

        assert rows == [{"title": "Gomorrah", "author": {"lastName": "Saviano"}}]

    async def test_list_records_requests(self, datasource: Datasource) -> None:
        books = datasource.get_collection("books")

        await books.list(PaginatedFilter(), Projection("id"))

        assert books.requests == [(PaginatedFilter(), Projection("id"))]
        assert len(books) == 3
