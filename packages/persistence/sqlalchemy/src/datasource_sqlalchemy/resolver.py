"""
Field path resolution against SQLAlchemy declarative models.

A local path resolves to the mapped attribute of the root model; a path
through relations resolves to the attribute of an ``aliased()`` entity named
after the relation hops (``"author.address"``).  Aliases are cached per
resolver so filters, ordering and joins of one statement agree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect
from sqlalchemy.orm import aliased
from sqlalchemy.orm.interfaces import MANYTOMANY, MANYTOONE

from datasource_toolkit.exceptions import (
    FieldNotFoundError,
    RelationNotFoundError,
    UnexpectedFieldTypeError,
)
from datasource_toolkit.field_path import FieldPath

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import Mapper, RelationshipProperty


def _relation_kind(relationship: RelationshipProperty[Any]) -> str:
    if relationship.direction is MANYTOMANY:
        return "ManyToMany"
    if relationship.direction is MANYTOONE:
        return "ManyToOne"
    return "OneToMany" if relationship.uselist else "OneToOne"


def _collection_name(mapper: Mapper[Any]) -> str:
    table = mapper.local_table
    return str(getattr(table, "name", mapper.class_.__name__))


class FieldResolver:
    """Resolves colon-delimited paths to SQLAlchemy attributes."""

    def __init__(self, model: type[Any]) -> None:
        self.model = model
        self._aliases: dict[tuple[str, ...], Any] = {}

    def resolve(self, path: str | FieldPath) -> Any:
        parsed = FieldPath.parse(path)
        mapper = self.mapper_for(parsed.relations)
        if parsed.field not in mapper.column_attrs:
            if parsed.field in mapper.relationships:
                relationship = mapper.relationships[parsed.field]
                raise UnexpectedFieldTypeError(
                    _collection_name(mapper),
                    parsed.field,
                    _relation_kind(relationship),
                    "Column",
                )
            raise FieldNotFoundError(
                _collection_name(mapper), parsed.field, list(mapper.column_attrs.keys())
            )
        return getattr(self.alias(parsed.relations), parsed.field)

    def physical_name(self, path: str | FieldPath) -> str:
        """Qualified column reference as rendered in SQL (``author.last_name``)."""
        parsed = FieldPath.parse(path)
        attribute = self.resolve(parsed)
        column = attribute.property.columns[0]
        if parsed.is_local:
            return str(column.name)
        return f"{'.'.join(parsed.relations)}.{column.name}"

    def mapper_for(self, relations: Sequence[str]) -> Mapper[Any]:
        mapper: Mapper[Any] = inspect(self.model)
        for name in relations:
            mapper = self._relationship(mapper, name).mapper
        return mapper

    def alias(self, relations: Sequence[str]) -> Any:
        """The entity for *relations*: the model itself, or a cached alias."""
        key = tuple(relations)
        if not key:
            return self.model
        if key not in self._aliases:
            parent = self.mapper_for(key[:-1])
            target = self._relationship(parent, key[-1]).mapper.class_
            self._aliases[key] = aliased(target, name=".".join(key))
        return self._aliases[key]

    def primary_keys(self) -> list[Any]:
        mapper: Mapper[Any] = inspect(self.model)
        return [
            getattr(self.model, mapper.get_property_by_column(column).key)
            for column in mapper.primary_key
        ]

    @staticmethod
    def _relationship(mapper: Mapper[Any], name: str) -> RelationshipProperty[Any]:
        relationship = mapper.relationships.get(name)
        if relationship is None:
            if name in mapper.column_attrs:
                raise UnexpectedFieldTypeError(
                    _collection_name(mapper), name, "Column", "ManyToOne|OneToOne"
                )
            raise RelationNotFoundError(
                _collection_name(mapper), name, list(mapper.relationships.keys())
            )
        if relationship.uselist:
            raise UnexpectedFieldTypeError(
                _collection_name(mapper),
                name,
                _relation_kind(relationship),
                "ManyToOne|OneToOne",
            )
        return relationship
