"""Core types shared across panelkit.

All types serialize to camelCase JSON (``model_dump(by_alias=True)``), which is
the shape stored in the configuration store and returned by the API.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.engine import URL, make_url


class CamelModel(BaseModel):
    """Base model with camelCase aliases that still accepts snake_case input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldType(StrEnum):
    """Normalized column type tags."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ENUM = "enum"
    JSON = "json"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid field type values."""
        return [t.value for t in cls]


class RelationType(StrEnum):
    """Direction of a link between two tables, seen from the owning table."""

    MANY_TO_ONE = "ManyToOne"  # e.g., order.customer_id -> customer
    ONE_TO_MANY = "OneToMany"  # e.g., customer <- order.customer_id
    ONE_TO_ONE = "OneToOne"  # foreign key columns are also unique

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid relation type values."""
        return [t.value for t in cls]


class EntityField(CamelModel):
    """One column of an introspected table."""

    name: str
    type: FieldType = FieldType.STRING
    is_required: bool = False
    is_id: bool = False
    is_reference: bool = False
    length: int | None = None
    enumeration: list[str] | None = None

    model_config = ConfigDict(use_enum_values=True)


class JoinColumnOption(CamelModel):
    """Local column and the column it points at on the related table."""

    name: str
    referenced_column_name: str


class EntityRelation(CamelModel):
    """Link from one table to another."""

    table: str
    relation_type: RelationType
    join_column_options: list[JoinColumnOption] | None = None

    model_config = ConfigDict(use_enum_values=True)


class DBSchema(CamelModel):
    """Introspected description of one table."""

    name: str
    fields: list[EntityField] = Field(default_factory=list)
    relations: list[EntityRelation] = Field(default_factory=list)
    unique_fields: list[list[str]] = Field(default_factory=list)


class DataSourceCredentials(CamelModel):
    """Connection details for the database to introspect.

    Either ``url`` or the individual parts must be given.
    """

    url: str | None = None
    dialect: str | None = None
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    schema_name: str | None = Field(default=None, description="Schema to introspect (PostgreSQL)")

    def to_url(self) -> URL:
        """Build a SQLAlchemy URL from the credentials."""
        if self.url:
            return make_url(self.url)
        if not self.dialect:
            raise ValueError("Data source credentials need either 'url' or 'dialect'")
        return URL.create(
            self.dialect,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )
