"""Collection schema: typed description of columns and relations."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Iterable


class FieldType(str, Enum):
    COLUMN = "Column"
    MANY_TO_ONE = "ManyToOne"
    ONE_TO_ONE = "OneToOne"
    ONE_TO_MANY = "OneToMany"
    MANY_TO_MANY = "ManyToMany"


class _FieldSchema(BaseModel):
    model_config = ConfigDict(frozen=True)


class ColumnSchema(_FieldSchema):
    type: Literal[FieldType.COLUMN] = FieldType.COLUMN
    column_type: str = "String"
    is_primary_key: bool = False
    is_sortable: bool = True


class ManyToOneSchema(_FieldSchema):
    type: Literal[FieldType.MANY_TO_ONE] = FieldType.MANY_TO_ONE
    foreign_collection: str
    foreign_key: str
    foreign_key_target: str = "id"


class OneToOneSchema(_FieldSchema):
    type: Literal[FieldType.ONE_TO_ONE] = FieldType.ONE_TO_ONE
    foreign_collection: str
    origin_key: str
    origin_key_target: str = "id"


class OneToManySchema(_FieldSchema):
    type: Literal[FieldType.ONE_TO_MANY] = FieldType.ONE_TO_MANY
    foreign_collection: str
    origin_key: str
    origin_key_target: str = "id"


class ManyToManySchema(_FieldSchema):
    type: Literal[FieldType.MANY_TO_MANY] = FieldType.MANY_TO_MANY
    foreign_collection: str
    through_collection: str
    foreign_key: str
    origin_key: str


RelationSchema = Union[ManyToOneSchema, OneToOneSchema, OneToManySchema, ManyToManySchema]
FieldSchema = Annotated[
    Union[ColumnSchema, RelationSchema],
    Field(discriminator="type"),
]


class CollectionSchema(BaseModel):
    """Fields of a collection, keyed by logical name."""

    model_config = ConfigDict(frozen=True)

    fields: dict[str, FieldSchema] = Field(default_factory=dict)

    @property
    def primary_keys(self) -> list[str]:
        return [
            name
            for name, field in self.fields.items()
            if isinstance(field, ColumnSchema) and field.is_primary_key
        ]

    def with_sortable(self, names: Iterable[str]) -> CollectionSchema:
        """Return a copy where the given columns are reported sortable."""
        wanted = set(names)
        return self.model_copy(
            update={
                "fields": {
                    name: (
                        field.model_copy(update={"is_sortable": True})
                        if name in wanted and isinstance(field, ColumnSchema)
                        else field
                    )
                    for name, field in self.fields.items()
                }
            }
        )
