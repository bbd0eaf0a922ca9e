"""Tests for EntitiesService."""

import pytest

from panelkit.configuration.service import ConfigurationService
from panelkit.entities.service import EntitiesService, humanize, pluralize, singularize
from panelkit.exceptions import EntityNotFoundError
from panelkit.schema.service import SchemasService


@pytest.fixture
def entities(
    schemas_service: SchemasService, configuration_service: ConfigurationService
) -> EntitiesService:
    return EntitiesService(schemas_service, configuration_service)


class TestInflection:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("order_items", "Order Items"), ("orderItems", "Order Items"), ("id", "Id")],
    )
    def test_humanize(self, name, expected):
        assert humanize(name) == expected

    @pytest.mark.parametrize(
        ("singular", "plural"),
        [("Order", "Orders"), ("Category", "Categories"), ("Address", "Addresses")],
    )
    def test_pluralize_and_back(self, singular, plural):
        assert pluralize(singular) == plural
        assert singularize(plural) == singular

    def test_singularize_leaves_status(self):
        assert singularize("Status") == "Status"


class TestEntitiesService:
    def test_disabled_entities_hidden(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ):
        configuration_service.upsert("disabled_entities", ["orders"])
        assert entities.list_entities() == ["customers", "profiles"]
        assert entities.list_all_entities() == ["customers", "orders", "profiles"]

    def test_fields_in_schema_order(self, entities: EntitiesService):
        names = [field.name for field in entities.get_entity_fields("customers")]
        assert names == ["id", "name", "email", "status", "tier"]

    def test_fields_in_configured_order(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ):
        configuration_service.upsert("entity_fields_orders", ["email", "name"], "customers")
        names = [field.name for field in entities.get_entity_fields("customers")]
        assert names == ["email", "name", "id", "status", "tier"]

    def test_field_labels(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ):
        configuration_service.upsert("entity_columns_labels", {"email": "E-mail"}, "customers")
        labels = entities.get_entity_field_labels("customers")
        assert labels["email"] == "E-mail"
        assert labels["name"] == "Name"

    def test_scalar_fields_exclude_references(self, entities: EntitiesService):
        names = [field.name for field in entities.get_entity_scalar_fields("orders")]
        assert names == ["id", "total"]

    def test_primary_field(self, entities: EntitiesService):
        assert entities.get_entity_primary_field("customers") == "id"
        assert entities.get_entity_primary_field("profiles") == "customer_id"

    def test_relations(self, entities: EntitiesService):
        assert entities.list_entity_relations("customers") == ["orders", "profiles"]

    def test_reference_fields(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ):
        configuration_service.upsert("entity_relations_labels", {"orders": "Purchases"}, "customers")
        configuration_service.upsert("entity_relations_order", ["profiles", "orders"], "customers")

        references = entities.get_entity_reference_fields("customers")
        assert [(r.table, r.label, r.relation_type) for r in references] == [
            ("profiles", None, "OneToOne"),
            ("orders", "Purchases", "OneToMany"),
        ]

    def test_hidden_reference_fields(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ):
        configuration_service.upsert("hidden_entity_relations", ["orders"], "customers")
        assert [r.table for r in entities.get_entity_reference_fields("customers")] == ["profiles"]

    def test_owning_reference_field_names_its_column(self, entities: EntitiesService):
        reference = entities.get_entity_reference_fields("orders")[0]
        assert reference.table == "customers"
        assert reference.field == "customer_id"

    def test_derived_diction(self, entities: EntitiesService):
        diction = entities.get_entity_diction("customers")
        assert (diction.singular, diction.plural) == ("Customer", "Customers")

    def test_configured_diction(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ):
        configuration_service.upsert("entity_diction", {"singular": "Client", "plural": ""}, "customers")
        diction = entities.get_entity_diction("customers")
        assert (diction.singular, diction.plural) == ("Client", "Clients")

    def test_unknown_entity(self, entities: EntitiesService):
        with pytest.raises(EntityNotFoundError):
            entities.get_entity_diction("invoices")
        with pytest.raises(EntityNotFoundError):
            entities.get_entity_fields("invoices")

    def test_reference_label_template(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ):
        configuration_service.upsert(
            "entity_relation_template", {"format": "{{ name }} <{{email}}>"}, "customers"
        )
        label = entities.render_reference_label(
            "customers", {"id": 1, "name": "Ada", "email": "ada@example.com"}
        )
        assert label == "Ada <ada@example.com>"

    def test_reference_label_falls_back_to_primary_key(self, entities: EntitiesService):
        assert entities.render_reference_label("customers", {"id": 7, "name": "Ada"}) == "7"
