"""PanelKit facade that wires the services together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from panelkit.accounts.service import AccountsService
from panelkit.actions.registry import ActionsRegistry
from panelkit.actions.service import ActionsService
from panelkit.configuration.service import ConfigurationService
from panelkit.core.connection import DatabaseConnection
from panelkit.core.settings import Settings
from panelkit.credentials.service import DATABASE_CREDENTIAL_GROUP, CredentialsService
from panelkit.entities.service import EntitiesService
from panelkit.persistence.factory import create_config_domain_persistence
from panelkit.schema.service import SchemasService
from panelkit.views.settings import EntityRelationsSettings

if TYPE_CHECKING:
    from panelkit.persistence.base import ConfigDomainPersistence
    from panelkit.schema.service import Introspector

logger = logging.getLogger(__name__)

SCHEMA_DOMAIN = "schema"
APP_CONFIG_DOMAIN = "app_config"
CREDENTIALS_DOMAIN = "credentials"
ACTIVATED_ACTIONS_DOMAIN = "activated_actions"


class PanelKit:
    """Admin panel backend.

    Owns the connection to panelkit's own database and one service per
    concern. Services are constructed eagerly; nothing touches the data
    source until ``bootstrap`` or the first schema access.

    Example:
        panel = PanelKit(Settings(data_source_url="postgresql://localhost/shop"))
        panel.bootstrap()
        print(panel.schemas.list_entity_names())
        panel.close()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        introspector: Introspector | None = None,
        actions_registry: ActionsRegistry | None = None,
    ) -> None:
        """Initialize PanelKit.

        Args:
            settings: Settings, read from the environment when omitted
            introspector: Replacement for the SQLAlchemy introspection routine
            actions_registry: Registry with the available actions
        """
        self.settings = settings or Settings.from_env()
        self._connection = DatabaseConnection(self.settings.database_url, echo=self.settings.echo)

        credential_defaults: dict[str, dict[str, Any]] = {}
        if self.settings.data_source_url:
            credential_defaults[DATABASE_CREDENTIAL_GROUP] = {"url": self.settings.data_source_url}

        self.configuration = ConfigurationService(self._persistence(APP_CONFIG_DOMAIN))
        self.credentials = CredentialsService(
            self._persistence(CREDENTIALS_DOMAIN), defaults=credential_defaults
        )
        self.schemas = SchemasService(
            self._persistence(SCHEMA_DOMAIN),
            self.credentials,
            self.configuration,
            reserved_prefix=self.settings.reserved_table_prefix,
            introspector=introspector,
        )
        self.entities = EntitiesService(self.schemas, self.configuration)
        self.accounts = AccountsService(self._connection)
        self.actions = ActionsService(
            actions_registry or ActionsRegistry(),
            self._persistence(ACTIVATED_ACTIONS_DOMAIN),
            self.credentials,
            self.accounts,
        )

    def _persistence(self, domain: str) -> ConfigDomainPersistence:
        return create_config_domain_persistence(domain, self.settings, self._connection)

    @property
    def connection(self) -> DatabaseConnection:
        return self._connection

    def setup(self) -> None:
        """Create panelkit's own storage without touching the data source."""
        self.configuration.setup()
        self.credentials.setup()
        self.accounts.setup()
        self.actions.setup()

    def bootstrap(self) -> None:
        """Create storage and load the data source schema."""
        self.setup()
        self.schemas.bootstrap()
        logger.info(
            f"PanelKit ready with {len(self.schemas.list_entity_names())} entities "
            f"({self.settings.persistence_adapter} persistence)"
        )

    def relations_settings(self, entity: str) -> EntityRelationsSettings:
        """Relationship settings screen of ``entity``."""
        return EntityRelationsSettings(entity, self.entities, self.configuration)

    def close(self) -> None:
        """Close the database connection."""
        self._connection.close()

    def __enter__(self) -> PanelKit:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()
