"""Known configuration keys, their defaults, scope and value types."""

from __future__ import annotations

from functools import cached_property
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter


class RelationTemplateValue(BaseModel):
    format: str


class DictionValue(BaseModel):
    singular: str = ""
    plural: str = ""


class SystemSettingsValue(BaseModel):
    forceIntrospection: bool = False
    tokenValidityDurationInDays: int = Field(default=14, gt=0)


class ConfigurationKey(BaseModel):
    """A configuration key, how it is scoped and what its values look like."""

    name: str
    default_value: Any
    value_type: Any = Field(default=Any)
    require_entity: bool = False
    description: str = ""

    @cached_property
    def adapter(self) -> TypeAdapter[Any]:
        """Validator for values stored under this key."""
        return TypeAdapter(self.value_type)

    def validate_value(self, value: Any) -> Any:
        """Validate ``value`` and return it as plain JSON data.

        Raises:
            pydantic.ValidationError: If the value does not have this key's shape
        """
        return self.adapter.dump_python(self.adapter.validate_python(value), exclude_unset=True)


DEFAULT_SYSTEM_SETTINGS: dict[str, Any] = {
    "forceIntrospection": False,
    "tokenValidityDurationInDays": 14,
}

CONFIGURATION_KEYS: dict[str, ConfigurationKey] = {
    key.name: key
    for key in [
        # Entity-scoped
        ConfigurationKey(
            name="entity_relation_template",
            default_value={"format": ""},
            value_type=RelationTemplateValue,
            require_entity=True,
            description="How this entity renders when another entity references it",
        ),
        ConfigurationKey(
            name="hidden_entity_relations",
            default_value=[],
            value_type=list[str],
            require_entity=True,
        ),
        ConfigurationKey(
            name="entity_relations_labels",
            default_value={},
            value_type=dict[str, str],
            require_entity=True,
        ),
        ConfigurationKey(
            name="entity_relations_order",
            default_value=[],
            value_type=list[str],
            require_entity=True,
        ),
        ConfigurationKey(
            name="entity_columns_labels",
            default_value={},
            value_type=dict[str, str],
            require_entity=True,
        ),
        ConfigurationKey(
            name="entity_fields_orders",
            default_value=[],
            value_type=list[str],
            require_entity=True,
        ),
        ConfigurationKey(
            name="hidden_entity_table_columns",
            default_value=[],
            value_type=list[str],
            require_entity=True,
        ),
        ConfigurationKey(
            name="hidden_entity_create_columns",
            default_value=[],
            value_type=list[str],
            require_entity=True,
        ),
        ConfigurationKey(
            name="hidden_entity_update_columns",
            default_value=[],
            value_type=list[str],
            require_entity=True,
        ),
        ConfigurationKey(
            name="entity_diction",
            default_value={"singular": "", "plural": ""},
            value_type=DictionValue,
            require_entity=True,
        ),
        # App-wide
        ConfigurationKey(name="disabled_entities", default_value=[], value_type=list[str]),
        ConfigurationKey(
            name="site_settings",
            default_value={"name": "panelkit", "homeLink": "/", "logo": ""},
            value_type=dict[str, str],
        ),
        ConfigurationKey(
            name="system_settings",
            default_value=DEFAULT_SYSTEM_SETTINGS,
            value_type=SystemSettingsValue,
        ),
    ]
}


def list_configuration_keys() -> list[str]:
    """Return all configuration key names, sorted."""
    return sorted(CONFIGURATION_KEYS)
