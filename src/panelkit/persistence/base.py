"""Domain-scoped document store interface and the in-memory backend."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any


class ConfigDomainPersistence(ABC):
    """Key/value store of JSON documents for one configuration domain.

    A domain is a namespace such as ``schema``, ``app_config`` or
    ``credentials``. Keys are unique inside a domain; writing an existing key
    replaces its value.
    """

    def __init__(self, domain: str) -> None:
        self._domain = domain

    @property
    def domain(self) -> str:
        """Domain name."""
        return self._domain

    @abstractmethod
    def setup(self) -> None:
        """Prepare the backend (create tables, directories, ...)."""

    @abstractmethod
    def get_all_items(self) -> list[Any]:
        """Return every stored value, ordered by key."""

    @abstractmethod
    def get_item(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default``."""

    @abstractmethod
    def upsert_item(self, key: str, value: Any) -> None:
        """Insert or replace the value for ``key``."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key`` if present."""

    @abstractmethod
    def reset_state(self, key_field: str, items: list[dict[str, Any]]) -> None:
        """Replace the whole domain with ``items``, keyed by ``item[key_field]``."""

    def get_all_as_key_value(self) -> dict[str, Any]:
        """Return the domain as a ``{key: value}`` dict."""
        return {key: self.get_item(key) for key in self.list_keys()}

    @abstractmethod
    def list_keys(self) -> list[str]:
        """Return all keys, sorted."""


class InMemoryConfigPersistence(ConfigDomainPersistence):
    """Process-local backend, mostly for tests and throwaway sessions."""

    def __init__(self, domain: str) -> None:
        super().__init__(domain)
        self._items: dict[str, Any] = {}

    def setup(self) -> None:
        pass

    def get_all_items(self) -> list[Any]:
        return [copy.deepcopy(self._items[key]) for key in sorted(self._items)]

    def get_item(self, key: str, default: Any = None) -> Any:
        if key not in self._items:
            return default
        return copy.deepcopy(self._items[key])

    def upsert_item(self, key: str, value: Any) -> None:
        self._items[key] = copy.deepcopy(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def reset_state(self, key_field: str, items: list[dict[str, Any]]) -> None:
        self._items = {str(item[key_field]): copy.deepcopy(item) for item in items}

    def list_keys(self) -> list[str]:
        return sorted(self._items)
