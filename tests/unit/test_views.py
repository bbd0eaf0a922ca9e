"""Tests for the settings view-models."""

import pytest

from panelkit.configuration.service import ConfigurationService
from panelkit.entities.service import EntitiesService
from panelkit.exceptions import ValidationError
from panelkit.schema.service import SchemasService
from panelkit.views.selection import EntitiesSelection
from panelkit.views.settings import EntityRelationsSettings
from panelkit.views.state import Error, Loading, QueryResult, Ready, combine_states


class TestCombineStates:
    def test_all_ready(self):
        state = combine_states(QueryResult.of([1]), QueryResult.of({"a": 1}))
        assert state == Ready(([1], {"a": 1}))

    def test_loading_wins_over_ready(self):
        assert combine_states(QueryResult.of(1), QueryResult.loading()) == Loading()

    def test_error_wins_over_loading(self):
        state = combine_states(QueryResult.loading(), QueryResult.failed("boom"))
        assert state == Error("boom")

    def test_first_error_in_argument_order(self):
        state = combine_states(
            QueryResult.of(1), QueryResult.failed("first"), QueryResult.failed("second")
        )
        assert state == Error("first")

    def test_pending_forces_loading(self):
        assert combine_states(QueryResult.of(1), is_pending=True) == Loading()

    def test_run_captures_panelkit_errors(self):
        def fail():
            raise ValidationError("bad input")

        assert QueryResult.run(fail).error == "bad input"
        assert QueryResult.run(lambda: 3).data == 3


class TestEntitiesSelection:
    @pytest.fixture
    def submitted(self) -> list[list[str]]:
        return []

    @pytest.fixture
    def selection(self, submitted) -> EntitiesSelection:
        return EntitiesSelection(
            all_list=["orders", "profiles", "invoices"],
            hidden_list=["orders"],
            on_submit=submitted.append,
            get_label=str.upper,
        )

    def test_seeded_from_hidden_list(self, selection: EntitiesSelection):
        assert selection.selection == ["orders"]
        assert selection.touched is False
        assert selection.can_submit is False

    def test_toggle_marks_touched(self, selection: EntitiesSelection):
        selection.toggle("orders")
        selection.toggle("invoices")
        assert selection.selection == ["invoices"]
        assert selection.touched is True
        assert selection.can_submit is True

    def test_submit_sends_selection_and_clears_touched(
        self, selection: EntitiesSelection, submitted
    ):
        selection.toggle("profiles")
        selection.submit()
        assert submitted == [["orders", "profiles"]]
        assert selection.touched is False
        assert selection.is_making_request is False

    def test_sync_with_same_value_keeps_local_changes(self, selection: EntitiesSelection):
        selection.toggle("profiles")
        selection.sync(["orders"])
        assert selection.selection == ["orders", "profiles"]

    def test_sync_with_new_value_reseeds(self, selection: EntitiesSelection):
        selection.toggle("profiles")
        selection.sync(["invoices"])
        assert selection.selection == ["invoices"]

    def test_items(self, selection: EntitiesSelection):
        assert selection.items()[0] == {"name": "orders", "label": "ORDERS", "selected": False}
        assert selection.items()[1]["selected"] is True


class TestEntityRelationsSettings:
    @pytest.fixture
    def entities(
        self, schemas_service: SchemasService, configuration_service: ConfigurationService
    ) -> EntitiesService:
        return EntitiesService(schemas_service, configuration_service)

    @pytest.fixture
    def screen(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ) -> EntityRelationsSettings:
        return EntityRelationsSettings("customers", entities, configuration_service)

    def test_four_tabs(self, screen: EntityRelationsSettings):
        tabs = screen.tabs()
        assert [tab.label for tab in tabs] == ["Reference Template", "Labels", "Selection", "Order"]
        assert [tab.config_key for tab in tabs] == [
            "entity_relation_template",
            "entity_relations_labels",
            "hidden_entity_relations",
            "entity_relations_order",
        ]
        assert all(isinstance(tab.state, Ready) for tab in tabs)

    def test_tab_content(self, screen: EntityRelationsSettings):
        template, labels, selection, order = screen.tabs()
        assert template.content["entityFields"] == ["id", "name", "email", "status", "tier"]
        assert [f["name"] for f in labels.content["fields"]] == ["orders", "profiles"]
        assert [item["name"] for item in selection.content["items"]] == ["orders", "profiles"]
        assert order.content["items"] == [
            {"value": "orders", "label": "Orders"},
            {"value": "profiles", "label": "Profiles"},
        ]

    def test_unknown_entity_is_an_error_state(
        self, entities: EntitiesService, configuration_service: ConfigurationService
    ):
        screen = EntityRelationsSettings("invoices", entities, configuration_service)
        assert isinstance(screen.state, Error)
        assert "invoices" in screen.state.message
        assert all(tab.content == {} for tab in screen.tabs())

    def test_template_submit(
        self, screen: EntityRelationsSettings, configuration_service: ConfigurationService
    ):
        invalidated = screen.submit("Reference Template", {"format": "{{ name }}"})
        assert invalidated == []
        assert configuration_service.show("entity_relation_template", "customers") == {
            "format": "{{ name }}"
        }

    def test_template_requires_format(self, screen: EntityRelationsSettings):
        with pytest.raises(ValidationError):
            screen.submit("Reference Template", {"format": ""})

    @pytest.mark.parametrize(
        ("tab", "key", "value"),
        [
            ("Labels", "entity_relations_labels", {"orders": "Purchases"}),
            ("Order", "entity_relations_order", ["profiles", "orders"]),
            ("Selection", "hidden_entity_relations", ["profiles"]),
        ],
    )
    def test_submit_invalidates_relations_endpoint(
        self,
        screen: EntityRelationsSettings,
        configuration_service: ConfigurationService,
        tab,
        key,
        value,
    ):
        assert screen.submit(tab, value) == ["/api/entities/customers/relations"]
        assert configuration_service.show(key, "customers") == value

    def test_labels_apply_to_order_tab(self, screen: EntityRelationsSettings):
        screen.submit("Labels", {"orders": "Purchases"})
        order = screen.get_tab("Order")
        assert order.content["items"][0] == {"value": "orders", "label": "Purchases"}

    def test_selection_submit_round_trip(
        self, screen: EntityRelationsSettings, configuration_service: ConfigurationService
    ):
        screen.selection.toggle("orders")
        screen.selection.submit()

        assert configuration_service.show("hidden_entity_relations", "customers") == ["orders"]
        assert screen.selection.selection == ["orders"]
        assert screen.selection.touched is False
        assert [r.table for r in screen.reference_fields.data] == ["profiles"]

    def test_unknown_tab(self, screen: EntityRelationsSettings):
        with pytest.raises(ValidationError):
            screen.submit("Colors", {})
