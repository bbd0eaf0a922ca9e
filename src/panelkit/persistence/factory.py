"""Pick the configuration backend configured in settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from panelkit.exceptions import ValidationError
from panelkit.persistence.base import ConfigDomainPersistence, InMemoryConfigPersistence
from panelkit.persistence.database import DatabaseConfigPersistence
from panelkit.persistence.json_file import JsonFileConfigPersistence

if TYPE_CHECKING:
    from panelkit.core.connection import DatabaseConnection
    from panelkit.core.settings import Settings


def create_config_domain_persistence(
    domain: str,
    settings: Settings,
    connection: DatabaseConnection | None = None,
) -> ConfigDomainPersistence:
    """Create the store for ``domain``.

    Args:
        domain: Domain name (schema, app_config, credentials, ...)
        settings: Settings selecting the backend
        connection: Required for the ``database`` backend

    Raises:
        ValidationError: If the adapter is unknown or a connection is missing
    """
    adapter = settings.persistence_adapter
    if adapter == "database":
        if connection is None:
            raise ValidationError("The 'database' persistence adapter needs a connection")
        return DatabaseConfigPersistence(domain, connection)
    if adapter == "json-file":
        return JsonFileConfigPersistence(domain, settings.persistence_dir)
    if adapter == "memory":
        return InMemoryConfigPersistence(domain)
    raise ValidationError(
        f"Unknown persistence adapter '{adapter}'. Valid adapters: database, json-file, memory"
    )
