"""Field path validation against a collection schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import FieldNotFoundError, UnexpectedFieldTypeError
from .field_path import FieldPath
from .schema import ColumnSchema, ManyToOneSchema, OneToOneSchema

if TYPE_CHECKING:
    from .collection import Collection


def validate_field(collection: Collection, path: str | FieldPath) -> None:
    """
    Check that *path* names a column, following relations through the datasource.

    Raises:
        FieldNotFoundError: A segment is not a field of its collection.
        UnexpectedFieldTypeError: A relation is used as a column or the other
            way around.
    """
    parsed = FieldPath.parse(path)
    fields = collection.schema.fields
    schema = fields.get(parsed.head)

    if schema is None:
        raise FieldNotFoundError(collection.name, parsed.head, list(fields))

    if parsed.tail is None:
        if not isinstance(schema, ColumnSchema):
            raise UnexpectedFieldTypeError(
                collection.name, parsed.head, schema.type.value, "Column"
            )
        return

    if not isinstance(schema, ManyToOneSchema | OneToOneSchema):
        raise UnexpectedFieldTypeError(
            collection.name, parsed.head, schema.type.value, "ManyToOne|OneToOne"
        )

    association = collection.datasource.get_collection(schema.foreign_collection)
    validate_field(association, parsed.tail)
