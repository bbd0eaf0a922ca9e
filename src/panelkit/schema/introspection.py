"""Reads table, column, relation and index metadata from a live database.

The result is a raw description close to what the SQLAlchemy inspector
reports. ``SchemasService`` turns it into ``DBSchema`` entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect
from sqlalchemy import types as sqltypes
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from panelkit.core.connection import DatabaseConnection
from panelkit.core.types import FieldType, RelationType
from panelkit.exceptions import IntrospectionError

if TYPE_CHECKING:
    from sqlalchemy import Engine

    from panelkit.core.types import DataSourceCredentials

logger = logging.getLogger(__name__)


@dataclass
class RawColumn:
    """Column as reported by the inspector."""

    name: str
    field_type: FieldType
    nullable: bool = True
    primary: bool = False
    autoincrement: bool = False
    has_default: bool = False
    length: int | None = None
    enum_values: list[str] | None = None
    is_used_in_relation_as_owner: bool = False


@dataclass
class RawRelation:
    """Relation between the owning table and ``related_table``."""

    related_table: str
    relation_type: RelationType
    join_column_options: list[dict[str, str]] | None = None


@dataclass
class RawIndex:
    """Index or unique constraint over one or more columns."""

    name: str | None
    columns: list[str]
    unique: bool = False
    primary: bool = False


@dataclass
class RawEntity:
    """One introspected table."""

    name: str
    columns: list[RawColumn] = field(default_factory=list)
    relations: list[RawRelation] = field(default_factory=list)
    indices: list[RawIndex] = field(default_factory=list)


def normalize_column_type(column_type: Any) -> tuple[FieldType, list[str] | None]:
    """Map a SQLAlchemy column type to a field type tag.

    Returns:
        The field type and, for enums, the allowed values
    """
    if isinstance(column_type, sqltypes.Enum):
        return FieldType.ENUM, list(column_type.enums)
    if isinstance(column_type, sqltypes.Boolean):
        return FieldType.BOOLEAN, None
    if isinstance(column_type, sqltypes.JSON):
        return FieldType.JSON, None
    if isinstance(column_type, (sqltypes.Date, sqltypes.DateTime, sqltypes.Time)):
        return FieldType.DATE, None
    if isinstance(column_type, (sqltypes.Integer, sqltypes.Numeric)):
        return FieldType.NUMBER, None
    if isinstance(column_type, (sqltypes.String, sqltypes.Text)):
        return FieldType.STRING, None

    # Dialect-specific types: fall back to the Python type they map to
    try:
        python_type = column_type.python_type
    except (NotImplementedError, AttributeError):
        return FieldType.STRING, None

    if python_type is bool:
        return FieldType.BOOLEAN, None
    if python_type in (int, float) or python_type.__name__ == "Decimal":
        return FieldType.NUMBER, None
    if python_type in (dict, list):
        return FieldType.JSON, None
    if python_type.__name__ in ("date", "datetime", "time"):
        return FieldType.DATE, None
    return FieldType.STRING, None


def _unique_groups(inspector: Any, table_name: str, schema: str | None) -> list[RawIndex]:
    indices: list[RawIndex] = []

    pk = inspector.get_pk_constraint(table_name, schema=schema)
    if pk and pk.get("constrained_columns"):
        indices.append(
            RawIndex(
                name=pk.get("name"),
                columns=list(pk["constrained_columns"]),
                unique=True,
                primary=True,
            )
        )

    for index in inspector.get_indexes(table_name, schema=schema):
        columns = [c for c in index.get("column_names", []) if c is not None]
        if columns:
            indices.append(
                RawIndex(name=index.get("name"), columns=columns, unique=bool(index.get("unique")))
            )

    try:
        constraints = inspector.get_unique_constraints(table_name, schema=schema)
    except NotImplementedError:
        constraints = []
    for constraint in constraints:
        indices.append(
            RawIndex(
                name=constraint.get("name"),
                columns=list(constraint["column_names"]),
                unique=True,
            )
        )

    # The same column group can be both a unique index and a unique constraint
    seen: set[tuple[tuple[str, ...], bool]] = set()
    deduplicated = []
    for index in indices:
        marker = (tuple(index.columns), index.unique)
        if marker not in seen:
            seen.add(marker)
            deduplicated.append(index)
    return deduplicated


def introspect_engine(engine: Engine, schema: str | None = None) -> list[RawEntity]:
    """Introspect every table reachable through ``engine``.

    Args:
        engine: Engine connected to the data source
        schema: Database schema to read (dialect default if None)

    Returns:
        Raw entities sorted by table name
    """
    inspector = inspect(engine)
    table_names = sorted(inspector.get_table_names(schema=schema))

    foreign_keys = {name: inspector.get_foreign_keys(name, schema=schema) for name in table_names}
    indices = {name: _unique_groups(inspector, name, schema) for name in table_names}

    def is_unique_group(table_name: str, columns: list[str]) -> bool:
        return any(
            index.unique and set(index.columns) == set(columns)
            for index in indices.get(table_name, [])
        )

    entities: list[RawEntity] = []
    for table_name in table_names:
        owned_columns = {
            column
            for fk in foreign_keys[table_name]
            for column in fk.get("constrained_columns", [])
        }
        pk_columns = next(
            (index.columns for index in indices[table_name] if index.primary), []
        )

        columns = []
        for column in inspector.get_columns(table_name, schema=schema):
            field_type, enum_values = normalize_column_type(column["type"])
            is_primary = column["name"] in pk_columns
            autoincrement = column.get("autoincrement") is True or (
                is_primary and len(pk_columns) == 1 and field_type == FieldType.NUMBER
            )
            columns.append(
                RawColumn(
                    name=column["name"],
                    field_type=field_type,
                    nullable=bool(column.get("nullable", True)),
                    primary=is_primary,
                    autoincrement=autoincrement,
                    has_default=column.get("default") is not None,
                    length=getattr(column["type"], "length", None),
                    enum_values=enum_values,
                    is_used_in_relation_as_owner=column["name"] in owned_columns,
                )
            )

        relations = []
        for fk in foreign_keys[table_name]:
            constrained = list(fk.get("constrained_columns", []))
            relations.append(
                RawRelation(
                    related_table=fk["referred_table"],
                    relation_type=RelationType.ONE_TO_ONE
                    if is_unique_group(table_name, constrained)
                    else RelationType.MANY_TO_ONE,
                    join_column_options=[
                        {"name": local, "referencedColumnName": remote}
                        for local, remote in zip(constrained, fk.get("referred_columns", []))
                    ],
                )
            )

        # Inverse side: other tables pointing at this one
        for other_table in table_names:
            for fk in foreign_keys[other_table]:
                if fk["referred_table"] != table_name:
                    continue
                relations.append(
                    RawRelation(
                        related_table=other_table,
                        relation_type=RelationType.ONE_TO_ONE
                        if is_unique_group(other_table, list(fk.get("constrained_columns", [])))
                        else RelationType.ONE_TO_MANY,
                    )
                )

        entities.append(
            RawEntity(
                name=table_name,
                columns=columns,
                relations=relations,
                indices=indices[table_name],
            )
        )

    logger.info(f"Introspected {len(entities)} tables")
    return entities


def introspect(credentials: DataSourceCredentials, echo: bool = False) -> list[RawEntity]:
    """Connect with ``credentials`` and introspect the data source.

    Raises:
        IntrospectionError: If the credentials are unusable or the catalog can't be read
        ConnectionError: If no engine can be created for the URL
    """
    try:
        url = credentials.to_url()
    except (ArgumentError, ValueError) as e:
        raise IntrospectionError(f"invalid data source credentials: {e}") from e

    connection = DatabaseConnection(url, echo=echo)
    try:
        return introspect_engine(connection.engine, schema=credentials.schema_name)
    except SQLAlchemyError as e:
        raise IntrospectionError(str(e)) from e
    finally:
        connection.close()
