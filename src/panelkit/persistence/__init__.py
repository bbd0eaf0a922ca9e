"""Configuration persistence for panelkit."""

from panelkit.persistence.base import ConfigDomainPersistence, InMemoryConfigPersistence
from panelkit.persistence.database import DatabaseConfigPersistence
from panelkit.persistence.factory import create_config_domain_persistence
from panelkit.persistence.json_file import JsonFileConfigPersistence

__all__ = [
    "ConfigDomainPersistence",
    "DatabaseConfigPersistence",
    "InMemoryConfigPersistence",
    "JsonFileConfigPersistence",
    "create_config_domain_persistence",
]
