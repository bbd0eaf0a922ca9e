"""Configuration keys and service."""

from panelkit.configuration.keys import CONFIGURATION_KEYS, ConfigurationKey
from panelkit.configuration.service import ConfigurationService

__all__ = [
    "CONFIGURATION_KEYS",
    "ConfigurationKey",
    "ConfigurationService",
]
