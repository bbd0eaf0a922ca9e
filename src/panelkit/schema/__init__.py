"""Schema introspection and caching."""

from panelkit.schema.introspection import (
    RawColumn,
    RawEntity,
    RawIndex,
    RawRelation,
    introspect,
    introspect_engine,
)
from panelkit.schema.service import SchemasService, format_introspect_data

__all__ = [
    "RawColumn",
    "RawEntity",
    "RawIndex",
    "RawRelation",
    "SchemasService",
    "format_introspect_data",
    "introspect",
    "introspect_engine",
]
