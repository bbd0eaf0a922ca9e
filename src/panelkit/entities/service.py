"""Entity-level views of the schema, shaped by per-entity configuration."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from panelkit.core.types import EntityField
from panelkit.exceptions import EntityNotFoundError

if TYPE_CHECKING:
    from panelkit.configuration.service import ConfigurationService
    from panelkit.schema.service import SchemasService

TEMPLATE_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


class EntityDiction(BaseModel):
    """Singular and plural display names of an entity."""

    singular: str
    plural: str


class ReferenceField(BaseModel):
    """A relation of an entity, as shown in relation lists."""

    table: str
    label: str | None = None
    relation_type: str
    field: str | None = None


def humanize(name: str) -> str:
    """``order_items`` / ``orderItems`` -> ``Order Items``."""
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name).replace("_", " ").replace("-", " ")
    return " ".join(word.capitalize() for word in spaced.split())


def pluralize(word: str) -> str:
    """Naive English plural, good enough for default labels."""
    if not word:
        return word
    lower = word.lower()
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return f"{word}es"
    if lower.endswith("y") and len(word) > 1 and lower[-2] not in "aeiou":
        return f"{word[:-1]}ies"
    return f"{word}s"


def singularize(word: str) -> str:
    """Inverse of ``pluralize`` for the common cases."""
    lower = word.lower()
    if lower.endswith("ies") and len(word) > 3:
        return f"{word[:-3]}y"
    if lower.endswith(("ses", "xes", "zes", "ches", "shes")):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith(("ss", "us")):
        return word[:-1]
    return word


class EntitiesService:
    """Answers the questions the settings and CRUD screens ask about an entity."""

    def __init__(
        self,
        schemas_service: SchemasService,
        configuration_service: ConfigurationService,
    ) -> None:
        self._schemas = schemas_service
        self._configuration = configuration_service

    def list_entities(self) -> list[str]:
        """Entities that are not disabled, sorted by name."""
        disabled = set(self._configuration.show("disabled_entities"))
        return [name for name in self._schemas.list_entity_names() if name not in disabled]

    def list_all_entities(self) -> list[str]:
        """Every entity, including disabled ones."""
        return self._schemas.list_entity_names()

    def get_entity_fields(self, entity: str) -> list[EntityField]:
        """Fields in configured order; unordered fields keep schema order."""
        fields = self._schemas.get_entity_schema(entity).fields
        order = self._configuration.show("entity_fields_orders", entity)
        return _apply_order(fields, order, key=lambda field: field.name)

    def get_entity_field_labels(self, entity: str) -> dict[str, str]:
        """Display label for every field."""
        labels = self._configuration.show("entity_columns_labels", entity)
        return {
            field.name: labels.get(field.name) or humanize(field.name)
            for field in self.get_entity_fields(entity)
        }

    def get_entity_scalar_fields(self, entity: str) -> list[EntityField]:
        """Fields that hold plain values, i.e. are not foreign keys."""
        return [field for field in self.get_entity_fields(entity) if not field.is_reference]

    def get_entity_primary_field(self, entity: str) -> str:
        """Name of the first primary key column."""
        fields = self._schemas.get_entity_schema(entity).fields
        for field in fields:
            if field.is_id:
                return field.name
        return fields[0].name if fields else "id"

    def list_entity_relations(self, entity: str) -> list[str]:
        """Names of every table related to ``entity``, sorted, without duplicates."""
        relations = self._schemas.get_entity_schema(entity).relations
        return sorted({relation.table for relation in relations})

    def get_entity_reference_fields(self, entity: str) -> list[ReferenceField]:
        """Visible relations with labels, in configured order."""
        hidden = set(self._configuration.show("hidden_entity_relations", entity))
        labels = self._configuration.show("entity_relations_labels", entity)
        order = self._configuration.show("entity_relations_order", entity)

        seen: set[str] = set()
        reference_fields = []
        for relation in self._schemas.get_entity_schema(entity).relations:
            if relation.table in hidden or relation.table in seen:
                continue
            seen.add(relation.table)
            join_columns = relation.join_column_options or []
            reference_fields.append(
                ReferenceField(
                    table=relation.table,
                    label=labels.get(relation.table),
                    relation_type=relation.relation_type,
                    field=join_columns[0].name if join_columns else None,
                )
            )

        return _apply_order(reference_fields, order, key=lambda field: field.table)

    def get_entity_diction(self, entity: str) -> EntityDiction:
        """Configured display names, falling back to derived ones."""
        self._ensure_entity(entity)
        configured = self._configuration.show("entity_diction", entity)
        base = humanize(entity)
        singular = configured.get("singular") or singularize(base)
        plural = configured.get("plural") or pluralize(singular)
        return EntityDiction(singular=singular, plural=plural)

    def render_reference_label(self, entity: str, row: dict[str, Any]) -> str:
        """Render ``row`` with the entity's relation template.

        ``{{ field }}`` placeholders are replaced with row values. Without a
        template the primary key value is used.
        """
        template = self._configuration.show("entity_relation_template", entity).get("format")
        if not template:
            return str(row.get(self.get_entity_primary_field(entity), ""))

        def replace(match: re.Match[str]) -> str:
            value = row.get(match.group(1))
            return "" if value is None else str(value)

        return TEMPLATE_PATTERN.sub(replace, template).strip()

    def _ensure_entity(self, entity: str) -> None:
        if entity not in self._schemas.list_entity_names():
            raise EntityNotFoundError(entity, self._schemas.list_entity_names())


def _apply_order(items: list[Any], order: list[str], key: Any) -> list[Any]:
    if not order:
        return list(items)
    position = {name: index for index, name in enumerate(order)}
    # sorted is stable, so unordered items keep their relative order at the end
    return sorted(items, key=lambda item: position.get(key(item), len(position)))
