"""Configuration documents stored in a SQL table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from panelkit.persistence.base import ConfigDomainPersistence
from panelkit.persistence.models import Base, ConfigDocument

if TYPE_CHECKING:
    from panelkit.core.connection import DatabaseConnection

logger = logging.getLogger(__name__)


class DatabaseConfigPersistence(ConfigDomainPersistence):
    """Stores one row per ``(domain, key)`` in ``panelkit_config_documents``."""

    def __init__(self, domain: str, connection: DatabaseConnection) -> None:
        super().__init__(domain)
        self._connection = connection
        self._initialized = False

    def setup(self) -> None:
        """Create panelkit tables if they don't exist."""
        if not self._initialized:
            Base.metadata.create_all(self._connection.engine)
            self._initialized = True

    def _get_session(self) -> Session:
        self.setup()
        return self._connection.get_session()

    def get_all_items(self) -> list[Any]:
        with self._get_session() as session:
            rows = session.scalars(
                select(ConfigDocument)
                .where(ConfigDocument.domain == self._domain)
                .order_by(ConfigDocument.key)
            ).all()
            return [row.value for row in rows]

    def get_item(self, key: str, default: Any = None) -> Any:
        with self._get_session() as session:
            row = session.get(ConfigDocument, (self._domain, key))
            return default if row is None else row.value

    def upsert_item(self, key: str, value: Any) -> None:
        with self._get_session() as session:
            row = session.get(ConfigDocument, (self._domain, key))
            if row is None:
                session.add(ConfigDocument(domain=self._domain, key=key, value=value))
            else:
                row.value = value
            session.commit()

    def remove_item(self, key: str) -> None:
        with self._get_session() as session:
            session.execute(
                delete(ConfigDocument).where(
                    ConfigDocument.domain == self._domain, ConfigDocument.key == key
                )
            )
            session.commit()

    def reset_state(self, key_field: str, items: list[dict[str, Any]]) -> None:
        with self._get_session() as session:
            session.execute(delete(ConfigDocument).where(ConfigDocument.domain == self._domain))
            for item in items:
                session.add(ConfigDocument(domain=self._domain, key=str(item[key_field]), value=item))
            session.commit()
        logger.info(f"Reset domain '{self._domain}' with {len(items)} items")

    def list_keys(self) -> list[str]:
        with self._get_session() as session:
            return list(
                session.scalars(
                    select(ConfigDocument.key)
                    .where(ConfigDocument.domain == self._domain)
                    .order_by(ConfigDocument.key)
                ).all()
            )
