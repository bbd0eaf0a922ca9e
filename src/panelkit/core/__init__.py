"""Core components for panelkit."""

from panelkit.core.connection import DatabaseConnection
from panelkit.core.settings import Settings
from panelkit.core.types import (
    CamelModel,
    DataSourceCredentials,
    DBSchema,
    EntityField,
    EntityRelation,
    FieldType,
    JoinColumnOption,
    RelationType,
)

__all__ = [
    "CamelModel",
    "DBSchema",
    "DataSourceCredentials",
    "DatabaseConnection",
    "EntityField",
    "EntityRelation",
    "FieldType",
    "JoinColumnOption",
    "RelationType",
    "Settings",
]
