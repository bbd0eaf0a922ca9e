"""Tests for the configuration persistence backends."""

from collections.abc import Generator
from pathlib import Path

import pytest

from panelkit.core.connection import DatabaseConnection
from panelkit.core.settings import Settings
from panelkit.exceptions import ValidationError
from panelkit.persistence import (
    ConfigDomainPersistence,
    DatabaseConfigPersistence,
    InMemoryConfigPersistence,
    JsonFileConfigPersistence,
    create_config_domain_persistence,
)


@pytest.fixture(params=["memory", "json-file", "database"])
def store(
    request: pytest.FixtureRequest, tmp_path: Path
) -> Generator[ConfigDomainPersistence, None, None]:
    """Each backend, set up for the ``schema`` domain."""
    connection = None
    if request.param == "memory":
        persistence: ConfigDomainPersistence = InMemoryConfigPersistence("schema")
    elif request.param == "json-file":
        persistence = JsonFileConfigPersistence("schema", tmp_path)
    else:
        connection = DatabaseConnection("sqlite:///:memory:")
        persistence = DatabaseConfigPersistence("schema", connection)
    persistence.setup()
    yield persistence
    if connection is not None:
        connection.close()


class TestConfigDomainPersistence:
    """Behaviour shared by every backend."""

    def test_missing_item_returns_default(self, store: ConfigDomainPersistence):
        assert store.get_item("nope") is None
        assert store.get_item("nope", {"a": 1}) == {"a": 1}

    def test_upsert_replaces_value(self, store: ConfigDomainPersistence):
        store.upsert_item("customers", {"name": "customers", "fields": []})
        store.upsert_item("customers", {"name": "customers", "fields": [{"name": "id"}]})
        assert store.get_item("customers") == {"name": "customers", "fields": [{"name": "id"}]}
        assert store.list_keys() == ["customers"]

    def test_get_all_items_ordered_by_key(self, store: ConfigDomainPersistence):
        store.upsert_item("orders", {"name": "orders"})
        store.upsert_item("customers", {"name": "customers"})
        assert store.get_all_items() == [{"name": "customers"}, {"name": "orders"}]

    def test_remove_item(self, store: ConfigDomainPersistence):
        store.upsert_item("orders", [1, 2])
        store.remove_item("orders")
        store.remove_item("orders")
        assert store.get_item("orders") is None

    def test_reset_state_replaces_domain(self, store: ConfigDomainPersistence):
        store.upsert_item("stale", {"name": "stale"})
        store.reset_state("name", [{"name": "b", "x": 2}, {"name": "a", "x": 1}])
        assert store.list_keys() == ["a", "b"]
        assert store.get_all_as_key_value() == {
            "a": {"name": "a", "x": 1},
            "b": {"name": "b", "x": 2},
        }

    def test_returned_values_are_copies(self, store: ConfigDomainPersistence):
        store.upsert_item("labels", {"orders": "Purchases"})
        value = store.get_item("labels")
        value["orders"] = "changed"
        assert store.get_item("labels") == {"orders": "Purchases"}


class TestDomainIsolation:
    def test_database_domains_do_not_leak(self, memory_connection: DatabaseConnection):
        schema = DatabaseConfigPersistence("schema", memory_connection)
        config = DatabaseConfigPersistence("app_config", memory_connection)
        schema.setup()
        config.setup()

        schema.upsert_item("customers", {"name": "customers"})
        config.reset_state("name", [])

        assert schema.get_item("customers") == {"name": "customers"}
        assert config.list_keys() == []

    def test_json_file_per_domain(self, tmp_path: Path):
        store = JsonFileConfigPersistence("credentials", tmp_path)
        store.setup()
        store.upsert_item("DATABASE", {"url": "sqlite:///x.db"})

        assert store.path == tmp_path / "credentials.json"
        reopened = JsonFileConfigPersistence("credentials", tmp_path)
        assert reopened.get_item("DATABASE") == {"url": "sqlite:///x.db"}


class TestFactory:
    def test_memory_adapter(self):
        store = create_config_domain_persistence("schema", Settings(persistence_adapter="memory"))
        assert isinstance(store, InMemoryConfigPersistence)
        assert store.domain == "schema"

    def test_json_file_adapter(self, tmp_path: Path):
        settings = Settings(persistence_adapter="json-file", persistence_dir=str(tmp_path))
        store = create_config_domain_persistence("schema", settings)
        assert isinstance(store, JsonFileConfigPersistence)

    def test_database_adapter_needs_connection(self):
        with pytest.raises(ValidationError):
            create_config_domain_persistence("schema", Settings(persistence_adapter="database"))

    def test_database_adapter(self, memory_connection: DatabaseConnection):
        store = create_config_domain_persistence(
            "schema", Settings(persistence_adapter="database"), memory_connection
        )
        assert isinstance(store, DatabaseConfigPersistence)
