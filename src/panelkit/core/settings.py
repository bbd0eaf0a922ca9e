"""Runtime settings for panelkit.

Resolution order for every value:

1. Explicit argument
2. ``PANELKIT_*`` environment variable
3. Built-in default
"""

from __future__ import annotations

import os
import secrets
from typing import Any, Literal

from pydantic import BaseModel, Field

DEFAULT_DATABASE_URL = "sqlite:///./panelkit.db"
DEFAULT_RESERVED_TABLE_PREFIX = "panelkit"

PersistenceAdapter = Literal["database", "json-file", "memory"]

_ENV_VARS = {
    "database_url": "PANELKIT_DATABASE_URL",
    "data_source_url": "PANELKIT_DATA_SOURCE_URL",
    "persistence_adapter": "PANELKIT_PERSISTENCE_ADAPTER",
    "persistence_dir": "PANELKIT_PERSISTENCE_DIR",
    "reserved_table_prefix": "PANELKIT_RESERVED_TABLE_PREFIX",
    "auth_secret": "PANELKIT_AUTH_SECRET",
    "echo": "PANELKIT_ECHO",
}


class Settings(BaseModel):
    """Process-wide settings."""

    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        description="Where panelkit keeps its own tables (configuration, accounts)",
    )
    data_source_url: str | None = Field(
        default=None,
        description="Database to introspect; falls back to stored DATABASE credentials",
    )
    persistence_adapter: PersistenceAdapter = Field(
        default="database", description="Backend for configuration documents"
    )
    persistence_dir: str = Field(
        default="./.panelkit", description="Directory used by the json-file adapter"
    )
    reserved_table_prefix: str = Field(
        default=DEFAULT_RESERVED_TABLE_PREFIX,
        description="Tables starting with this prefix are hidden from the schema",
    )
    auth_secret: str = Field(
        default_factory=lambda: secrets.token_hex(32),
        description="Key used to sign access tokens",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from the environment, letting non-None overrides win."""
        values: dict[str, Any] = {}
        for name, env_var in _ENV_VARS.items():
            if (env_value := os.getenv(env_var)) is not None:
                values[name] = env_value.lower() in ("1", "true", "yes") if name == "echo" else env_value
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
