"""Schema service: load the data source schema from cache or by introspection."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from panelkit.core.settings import DEFAULT_RESERVED_TABLE_PREFIX
from panelkit.core.types import (
    DataSourceCredentials,
    DBSchema,
    EntityField,
    EntityRelation,
    FieldType,
    JoinColumnOption,
)
from panelkit.credentials.service import DATABASE_CREDENTIAL_GROUP
from panelkit.exceptions import EntityNotFoundError
from panelkit.schema.introspection import RawEntity, introspect

if TYPE_CHECKING:
    from panelkit.configuration.service import ConfigurationService
    from panelkit.credentials.service import CredentialsService
    from panelkit.persistence.base import ConfigDomainPersistence

logger = logging.getLogger(__name__)

Introspector = Callable[[DataSourceCredentials], list[RawEntity]]


def format_introspect_data(
    raw_entities: list[RawEntity],
    reserved_prefix: str = DEFAULT_RESERVED_TABLE_PREFIX,
) -> list[DBSchema]:
    """Reshape raw introspection output into sorted ``DBSchema`` entries.

    Tables whose name starts with ``reserved_prefix`` are dropped.
    """
    db_schema = []
    for entity in raw_entities:
        if reserved_prefix and entity.name.startswith(reserved_prefix):
            continue

        fields = [
            EntityField(
                name=column.name,
                type=FieldType.ENUM if column.enum_values else column.field_type,
                is_required=not column.nullable
                and not column.has_default
                and not column.autoincrement,
                is_id=column.primary,
                is_reference=column.is_used_in_relation_as_owner,
                length=column.length,
                enumeration=column.enum_values,
            )
            for column in entity.columns
        ]

        relations = [
            EntityRelation(
                table=relation.related_table,
                relation_type=relation.relation_type,
                join_column_options=[
                    JoinColumnOption.model_validate(option)
                    for option in relation.join_column_options
                ]
                if relation.join_column_options is not None
                else None,
            )
            for relation in entity.relations
        ]

        db_schema.append(
            DBSchema(
                name=entity.name,
                fields=fields,
                relations=relations,
                unique_fields=[index.columns for index in entity.indices if index.unique],
            )
        )

    db_schema.sort(key=lambda entity: entity.name)
    return db_schema


class SchemasService:
    """Owns the in-memory copy of the data source schema.

    The first call to ``get_db_schema`` (or ``bootstrap``) loads it, either
    from the ``schema`` configuration domain or by introspecting the data
    source. The load runs under a lock, so concurrent first callers wait for
    a single load instead of introspecting in parallel.
    """

    def __init__(
        self,
        persistence: ConfigDomainPersistence,
        credentials_service: CredentialsService,
        configuration_service: ConfigurationService,
        reserved_prefix: str = DEFAULT_RESERVED_TABLE_PREFIX,
        introspector: Introspector | None = None,
    ) -> None:
        self._persistence = persistence
        self._credentials_service = credentials_service
        self._configuration_service = configuration_service
        self._reserved_prefix = reserved_prefix
        self._introspector: Introspector = introspector or introspect
        self._db_schema: list[DBSchema] | None = None
        self._lock = threading.Lock()

    def bootstrap(self) -> None:
        """Prepare the schema store and load the schema."""
        self._persistence.setup()
        self._load_db_schema()

    def _load_db_schema(self) -> list[DBSchema]:
        if self._db_schema is not None:
            return self._db_schema

        with self._lock:
            if self._db_schema is None:
                self._db_schema = self._init_db_schema()
            return self._db_schema

    def _init_db_schema(self) -> list[DBSchema]:
        if self._configuration_service.get_system_settings("forceIntrospection"):
            logger.info("forceIntrospection is enabled, introspecting data source")
            return self._do_introspection()

        saved_db_schema = self._persistence.get_all_items()
        if saved_db_schema:
            logger.info(f"Loaded {len(saved_db_schema)} entities from the schema store")
            schema = [DBSchema.model_validate(item) for item in saved_db_schema]
            schema.sort(key=lambda entity: entity.name)
            return schema

        return self._do_introspection()

    def _do_introspection(self) -> list[DBSchema]:
        credentials = DataSourceCredentials.model_validate(
            self._credentials_service.use_group_value(DATABASE_CREDENTIAL_GROUP)
        )

        raw_entities = self._introspector(credentials)
        db_schema = format_introspect_data(raw_entities, self._reserved_prefix)

        self._persistence.reset_state(
            "name", [entity.model_dump(by_alias=True) for entity in db_schema]
        )
        logger.info(f"Introspection stored {len(db_schema)} entities")

        return db_schema

    def get_db_schema(self) -> list[DBSchema]:
        """Return the schema, loading it on first use."""
        return self._load_db_schema()

    def introspect(self) -> list[DBSchema]:
        """Introspect now and replace both the stored and the cached schema."""
        with self._lock:
            self._db_schema = self._do_introspection()
            return self._db_schema

    def reset(self) -> None:
        """Drop the in-memory copy; the next access loads again."""
        with self._lock:
            self._db_schema = None

    def list_entity_names(self) -> list[str]:
        """Names of all entities, sorted."""
        return [entity.name for entity in self.get_db_schema()]

    def get_entity_schema(self, entity: str) -> DBSchema:
        """Return the schema of one entity.

        Raises:
            EntityNotFoundError: If the entity is not in the schema
        """
        for db_entity in self.get_db_schema():
            if db_entity.name == entity:
                return db_entity
        raise EntityNotFoundError(entity, self.list_entity_names())
