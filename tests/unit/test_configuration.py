"""Tests for ConfigurationService and CredentialsService."""

import pytest

from panelkit.configuration.keys import CONFIGURATION_KEYS, list_configuration_keys
from panelkit.configuration.service import ConfigurationService
from panelkit.credentials.service import DATABASE_CREDENTIAL_GROUP, CredentialsService
from panelkit.exceptions import ConfigurationKeyError, CredentialsNotFoundError, ValidationError
from panelkit.persistence.base import InMemoryConfigPersistence


class TestConfigurationService:
    def test_unset_key_returns_default(self, configuration_service: ConfigurationService):
        assert configuration_service.show("hidden_entity_relations", "customers") == []
        assert configuration_service.show("entity_relation_template", "customers") == {
            "format": ""
        }

    def test_default_is_not_shared(self, configuration_service: ConfigurationService):
        value = configuration_service.show("hidden_entity_relations", "customers")
        value.append("orders")
        assert configuration_service.show("hidden_entity_relations", "customers") == []

    def test_upsert_is_scoped_by_entity(self, configuration_service: ConfigurationService):
        configuration_service.upsert("entity_relations_labels", {"orders": "Purchases"}, "customers")

        assert configuration_service.show("entity_relations_labels", "customers") == {
            "orders": "Purchases"
        }
        assert configuration_service.show("entity_relations_labels", "orders") == {}

    def test_upsert_replaces_previous_value(self, configuration_service: ConfigurationService):
        configuration_service.upsert("entity_relations_order", ["orders", "profiles"], "customers")
        configuration_service.upsert("entity_relations_order", ["profiles"], "customers")
        assert configuration_service.show("entity_relations_order", "customers") == ["profiles"]

    def test_reset_restores_default(self, configuration_service: ConfigurationService):
        configuration_service.upsert("disabled_entities", ["orders"])
        configuration_service.reset("disabled_entities")
        assert configuration_service.show("disabled_entities") == []

    def test_unknown_key(self, configuration_service: ConfigurationService):
        with pytest.raises(ConfigurationKeyError) as exc_info:
            configuration_service.show("no_such_key")
        assert "entity_diction" in exc_info.value.context["valid_keys"]

    def test_entity_key_without_entity(self, configuration_service: ConfigurationService):
        with pytest.raises(ValidationError):
            configuration_service.upsert("hidden_entity_relations", ["orders"])

    def test_app_key_with_entity(self, configuration_service: ConfigurationService):
        with pytest.raises(ValidationError):
            configuration_service.show("disabled_entities", "customers")

    @pytest.mark.parametrize(
        ("key", "entity", "value"),
        [
            ("hidden_entity_relations", "customers", "orders"),
            ("entity_relations_order", "customers", {"orders": 1}),
            ("entity_relations_labels", "customers", "oops"),
            ("entity_columns_labels", "customers", {"email": 5}),
            ("entity_relation_template", "customers", {"template": "{{ name }}"}),
            ("entity_diction", "customers", ["Client", "Clients"]),
            ("disabled_entities", None, [1, 2]),
            ("site_settings", None, "panelkit"),
            ("system_settings", None, "oops"),
            ("system_settings", None, {"tokenValidityDurationInDays": 0}),
            ("system_settings", None, {"forceIntrospection": "sometimes"}),
        ],
    )
    def test_upsert_rejects_wrong_shape(
        self, configuration_service: ConfigurationService, key: str, entity: str | None, value
    ):
        with pytest.raises(ValidationError) as exc_info:
            configuration_service.upsert(key, value, entity)

        assert exc_info.value.field_errors
        assert configuration_service.show(key, entity) == CONFIGURATION_KEYS[key].default_value

    def test_rejected_system_settings_keep_sign_in_working(
        self, configuration_service: ConfigurationService
    ):
        with pytest.raises(ValidationError):
            configuration_service.upsert("system_settings", "oops")
        assert configuration_service.get_system_settings("tokenValidityDurationInDays") == 14

    def test_upsert_drops_unknown_template_fields(
        self, configuration_service: ConfigurationService
    ):
        configuration_service.upsert(
            "entity_relation_template", {"format": "{{ name }}", "fields": ["name"]}, "customers"
        )
        assert configuration_service.show("entity_relation_template", "customers") == {
            "format": "{{ name }}"
        }

    def test_upsert_coerces_system_settings(self, configuration_service: ConfigurationService):
        configuration_service.upsert("system_settings", {"tokenValidityDurationInDays": "7"})
        assert configuration_service.get_system_settings("tokenValidityDurationInDays") == 7
        assert configuration_service.get_system_settings("forceIntrospection") is False

    def test_system_settings_defaults(self, configuration_service: ConfigurationService):
        assert configuration_service.get_system_settings("forceIntrospection") is False
        assert configuration_service.get_system_settings("tokenValidityDurationInDays") == 14

    def test_system_settings_partial_override(self, configuration_service: ConfigurationService):
        configuration_service.upsert("system_settings", {"forceIntrospection": True})
        assert configuration_service.get_system_settings("forceIntrospection") is True
        assert configuration_service.get_system_settings("tokenValidityDurationInDays") == 14

    def test_unknown_system_setting(self, configuration_service: ConfigurationService):
        with pytest.raises(ConfigurationKeyError):
            configuration_service.get_system_settings("nope")

    def test_keys_listed_sorted(self):
        keys = list_configuration_keys()
        assert keys == sorted(CONFIGURATION_KEYS)
        assert "entity_relation_template" in keys


class TestCredentialsService:
    def test_stored_value_wins_over_default(self):
        service = CredentialsService(
            InMemoryConfigPersistence("credentials"),
            defaults={DATABASE_CREDENTIAL_GROUP: {"url": "sqlite:///default.db"}},
        )
        assert service.use_group_value(DATABASE_CREDENTIAL_GROUP) == {"url": "sqlite:///default.db"}

        service.upsert_group_value(DATABASE_CREDENTIAL_GROUP, {"url": "sqlite:///stored.db"})
        assert service.use_group_value(DATABASE_CREDENTIAL_GROUP) == {"url": "sqlite:///stored.db"}

    def test_missing_group(self):
        service = CredentialsService(InMemoryConfigPersistence("credentials"))
        assert service.has_group("SMTP") is False
        with pytest.raises(CredentialsNotFoundError):
            service.use_group_value("SMTP")

    def test_empty_default_ignored(self):
        service = CredentialsService(
            InMemoryConfigPersistence("credentials"), defaults={DATABASE_CREDENTIAL_GROUP: {}}
        )
        assert service.has_group(DATABASE_CREDENTIAL_GROUP) is False

    def test_remove_group(self):
        service = CredentialsService(InMemoryConfigPersistence("credentials"))
        service.upsert_group_value("ACTION__1", {"token": "x"})
        service.remove_group("ACTION__1")
        assert service.has_group("ACTION__1") is False
