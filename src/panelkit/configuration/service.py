"""Configuration service: typed access to the ``app_config`` domain."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from panelkit.configuration.keys import (
    CONFIGURATION_KEYS,
    DEFAULT_SYSTEM_SETTINGS,
    ConfigurationKey,
    list_configuration_keys,
)
from panelkit.exceptions import ConfigurationKeyError, ValidationError

if TYPE_CHECKING:
    from panelkit.persistence.base import ConfigDomainPersistence

logger = logging.getLogger(__name__)


class ConfigurationService:
    """Reads and writes configuration values keyed by ``(key, entity)``.

    Each pair maps to exactly one document; writing it again replaces the
    previous value. Reads of unset pairs return the key's default.
    """

    def __init__(self, persistence: ConfigDomainPersistence) -> None:
        self._persistence = persistence

    def setup(self) -> None:
        """Prepare the backing store."""
        self._persistence.setup()

    def _resolve_key(self, key: str, entity: str | None) -> tuple[ConfigurationKey, str]:
        config_key = CONFIGURATION_KEYS.get(key)
        if config_key is None:
            raise ConfigurationKeyError(key, list_configuration_keys())

        if config_key.require_entity and not entity:
            raise ValidationError(
                f"Configuration key '{key}' is entity scoped; an entity is required",
                {"entity": "required"},
            )
        if not config_key.require_entity and entity:
            raise ValidationError(
                f"Configuration key '{key}' is app wide; it does not take an entity",
                {"entity": "not allowed"},
            )

        storage_key = f"{key}__{entity}" if entity else key
        return config_key, storage_key

    def show(self, key: str, entity: str | None = None) -> Any:
        """Return the stored value, or the key's default.

        Raises:
            ConfigurationKeyError: If key is unknown
            ValidationError: If the entity slug does not match the key's scope
        """
        config_key, storage_key = self._resolve_key(key, entity)
        value = self._persistence.get_item(storage_key)
        if value is None:
            return copy.deepcopy(config_key.default_value)
        return value

    def upsert(self, key: str, value: Any, entity: str | None = None) -> None:
        """Store ``value`` for ``(key, entity)``, replacing any previous value.

        Raises:
            ConfigurationKeyError: If key is unknown
            ValidationError: If the entity slug does not match the key's scope, or
                ``value`` does not have the key's shape
        """
        config_key, storage_key = self._resolve_key(key, entity)
        try:
            value = config_key.validate_value(value)
        except PydanticValidationError as e:
            field_errors = {
                ".".join(str(part) for part in error["loc"]) or key: error["msg"]
                for error in e.errors()
            }
            message = f"Invalid value for configuration key '{key}'"
            raise ValidationError(message, field_errors) from e
        self._persistence.upsert_item(storage_key, value)
        logger.info(f"Configuration '{storage_key}' updated")

    def reset(self, key: str, entity: str | None = None) -> None:
        """Drop the stored value so the default applies again."""
        _, storage_key = self._resolve_key(key, entity)
        self._persistence.remove_item(storage_key)

    def get_system_settings(self, name: str) -> Any:
        """Return one system setting, e.g. ``forceIntrospection``."""
        settings = {**DEFAULT_SYSTEM_SETTINGS, **(self.show("system_settings") or {})}
        if name not in settings:
            raise ConfigurationKeyError(name, sorted(DEFAULT_SYSTEM_SETTINGS))
        return settings[name]
