"""Grouped credentials (data source connection, action secrets)."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from panelkit.exceptions import CredentialsNotFoundError

if TYPE_CHECKING:
    from panelkit.persistence.base import ConfigDomainPersistence

logger = logging.getLogger(__name__)

DATABASE_CREDENTIAL_GROUP = "DATABASE"


class CredentialsService:
    """Stores one JSON document per credential group.

    ``defaults`` supply values for groups that were never stored, e.g. the
    data source URL taken from settings.
    """

    def __init__(
        self,
        persistence: ConfigDomainPersistence,
        defaults: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self._persistence = persistence
        self._defaults = {group: value for group, value in (defaults or {}).items() if value}

    def setup(self) -> None:
        """Prepare the backing store."""
        self._persistence.setup()

    def has_group(self, group: str) -> bool:
        """Check whether a value (stored or default) exists for ``group``."""
        return self._persistence.get_item(group) is not None or group in self._defaults

    def use_group_value(self, group: str) -> dict[str, Any]:
        """Return the credentials stored for ``group``.

        Raises:
            CredentialsNotFoundError: If neither a stored value nor a default exists
        """
        value = self._persistence.get_item(group)
        if value is not None:
            return value
        if group in self._defaults:
            return copy.deepcopy(self._defaults[group])
        raise CredentialsNotFoundError(group)

    def upsert_group_value(self, group: str, value: dict[str, Any]) -> None:
        """Replace the credentials of ``group``."""
        self._persistence.upsert_item(group, value)
        logger.info(f"Credentials for group '{group}' updated")

    def remove_group(self, group: str) -> None:
        """Forget stored credentials of ``group``."""
        self._persistence.remove_item(group)
