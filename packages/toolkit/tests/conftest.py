"""Shared fixtures for toolkit tests."""

from __future__ import annotations

import pytest

from datasource_toolkit.collection import Datasource
from datasource_toolkit.evaluator import build_default_registry
from datasource_toolkit.memory import MemoryCollection
from datasource_toolkit.schema import (
    CollectionSchema,
    ColumnSchema,
    ManyToOneSchema,
    OneToManySchema,
)


@pytest.fixture
def registry():
    """Default in-memory operator registry."""
    return build_default_registry()


@pytest.fixture
def datasource() -> Datasource:
    """Books written by persons, a person has many books."""
    ds = Datasource()
    MemoryCollection(
        "books",
        ds,
        CollectionSchema(
            fields={
                "id": ColumnSchema(column_type="Number", is_primary_key=True),
                "authorId": ColumnSchema(column_type="Number"),
                "title": ColumnSchema(),
                "author": ManyToOneSchema(
                    foreign_collection="persons", foreign_key="authorId"
                ),
            }
        ),
        [
            {
                "id": 1,
                "authorId": 1,
                "title": "Foundation",
                "author": {"id": 1, "firstName": "Isaac", "lastName": "Asimov"},
            },
            {
                "id": 2,
                "authorId": 2,
                "title": "Beat the dealer",
                "author": {"id": 2, "firstName": "Edward O.", "lastName": "Thorp"},
            },
            {
                "id": 3,
                "authorId": 3,
                "title": "Gomorrah",
                "author": {"id": 3, "firstName": "Roberto", "lastName": "Saviano"},
            },
        ],
    )
    MemoryCollection(
        "persons",
        ds,
        CollectionSchema(
            fields={
                "id": ColumnSchema(column_type="Number", is_primary_key=True),
                "firstName": ColumnSchema(),
                "lastName": ColumnSchema(),
                "books": OneToManySchema(foreign_collection="books", origin_key="authorId"),
            }
        ),
        [
            {"id": 1, "firstName": "Isaac", "lastName": "Asimov"},
            {"id": 2, "firstName": "Edward O.", "lastName": "Thorp"},
            {"id": 3, "firstName": "Roberto", "lastName": "Saviano"},
        ],
    )
    return ds
