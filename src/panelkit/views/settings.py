"""Relationship settings of an entity.

The screen has four tabs, each bound to one configuration key of the entity:

- Reference Template: ``entity_relation_template``
- Labels: ``entity_relations_labels``
- Selection: ``hidden_entity_relations``
- Order: ``entity_relations_order``

Submitting a tab upserts its key and returns the endpoints whose cached
responses are now stale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from panelkit.entities.service import humanize, pluralize
from panelkit.exceptions import PanelKitError, ValidationError
from panelkit.views.forms import FormSchema, build_form
from panelkit.views.selection import EntitiesSelection
from panelkit.views.state import QueryResult, Ready, ViewState, combine_states

if TYPE_CHECKING:
    from panelkit.configuration.service import ConfigurationService
    from panelkit.entities.service import EntitiesService

logger = logging.getLogger(__name__)

ENTITY_RELATIONS_ENDPOINT = "/api/entities/{entity}/relations"


def entity_relations_endpoint(entity: str) -> str:
    return ENTITY_RELATIONS_ENDPOINT.format(entity=entity)


@dataclass
class SettingsTab:
    """One tab: what it shows and which configuration key it writes."""

    label: str
    config_key: str
    description: str
    state: ViewState
    content: dict[str, Any] = field(default_factory=dict)
    invalidates: list[str] = field(default_factory=list)


class EntityRelationsSettings:
    """View-model of the relationship settings screen for one entity."""

    TAB_REFERENCE_TEMPLATE = "Reference Template"
    TAB_LABELS = "Labels"
    TAB_SELECTION = "Selection"
    TAB_ORDER = "Order"

    title = "Relationship Settings"

    def __init__(
        self,
        entity: str,
        entities_service: EntitiesService,
        configuration_service: ConfigurationService,
    ) -> None:
        self.entity = entity
        self._entities = entities_service
        self._configuration = configuration_service
        self.selection: EntitiesSelection | None = None
        self.refresh()

    def refresh(self) -> None:
        """Re-run every query behind the screen."""
        entity = self.entity
        self.entity_fields = QueryResult.run(lambda: self._entities.get_entity_fields(entity))
        self.relation_list = QueryResult.run(lambda: self._entities.list_entity_relations(entity))
        self.reference_fields = QueryResult.run(
            lambda: self._entities.get_entity_reference_fields(entity)
        )
        self.relation_template = QueryResult.run(
            lambda: self._configuration.show("entity_relation_template", entity)
        )
        self.hidden_relations = QueryResult.run(
            lambda: self._configuration.show("hidden_entity_relations", entity)
        )
        self.relations_labels = QueryResult.run(
            lambda: self._configuration.show("entity_relations_labels", entity)
        )

        hidden = self.hidden_relations.data_or([])
        all_relations = self.relation_list.data_or([])
        if self.selection is None:
            self.selection = EntitiesSelection(
                all_list=all_relations,
                hidden_list=hidden,
                on_submit=lambda value: self.submit(self.TAB_SELECTION, value),
                get_label=self.relation_label,
                description="Disable entities that you dont want to appear anywhere in the app",
            )
        else:
            self.selection.sync(hidden, all_relations)

    @property
    def state(self) -> ViewState:
        return combine_states(
            self.relation_template,
            self.entity_fields,
            self.reference_fields,
            self.relation_list,
            self.hidden_relations,
        )

    def relation_label(self, relation: str) -> str:
        """Configured label of a relation, else the plural name of its entity."""
        label = self.relations_labels.data_or({}).get(relation)
        if label:
            return label
        try:
            return self._entities.get_entity_diction(relation).plural
        except PanelKitError:
            return pluralize(humanize(relation))

    def reference_template_form(self) -> FormSchema:
        return build_form(
            {
                "format": {
                    "type": "text",
                    "label": "Display Format",
                    "validations": [{"validationType": "required"}],
                }
            },
            button_text="Save Changes",
            initial_values=self.relation_template.data_or({}),
        )

    def labels_form(self) -> FormSchema:
        tables = [reference.table for reference in self.reference_fields.data_or([])]
        return build_form(
            {table: {"type": "text", "label": table} for table in tables},
            button_text="Save Changes",
            initial_values=self.relations_labels.data_or({}),
        )

    def order_items(self) -> list[dict[str, str]]:
        return [
            {"value": reference.table, "label": reference.label or self.relation_label(reference.table)}
            for reference in self.reference_fields.data_or([])
        ]

    def tabs(self) -> list[SettingsTab]:
        """The four tabs in display order."""
        state = self.state
        relations_endpoint = entity_relations_endpoint(self.entity)
        tabs = [
            SettingsTab(
                label=self.TAB_REFERENCE_TEMPLATE,
                config_key="entity_relation_template",
                description=(
                    "You get to customize how this entity gets to be rendered "
                    "when other entity references it"
                ),
                state=state,
            ),
            SettingsTab(
                label=self.TAB_LABELS,
                config_key="entity_relations_labels",
                description="Customize the labels of the relations",
                state=state,
                invalidates=[relations_endpoint],
            ),
            SettingsTab(
                label=self.TAB_SELECTION,
                config_key="hidden_entity_relations",
                description=self.selection.description if self.selection else "",
                state=state,
                invalidates=[relations_endpoint],
            ),
            SettingsTab(
                label=self.TAB_ORDER,
                config_key="entity_relations_order",
                description="Order the relations how you want them to appear",
                state=state,
                invalidates=[relations_endpoint],
            ),
        ]
        if isinstance(state, Ready):
            tabs[0].content = {
                **self.reference_template_form().model_dump(by_alias=True),
                "entityFields": [f.name for f in self.entity_fields.data_or([])],
            }
            tabs[1].content = self.labels_form().model_dump(by_alias=True)
            tabs[2].content = {"items": self.selection.items() if self.selection else []}
            tabs[3].content = {"items": self.order_items()}
        return tabs

    def get_tab(self, label: str) -> SettingsTab:
        for tab in self.tabs():
            if tab.label == label:
                return tab
        raise ValidationError(f"Unknown tab '{label}'")

    def submit(self, label: str, value: Any) -> list[str]:
        """Upsert the tab's key for this entity and return stale endpoints."""
        tab = self.get_tab(label)
        if label == self.TAB_REFERENCE_TEMPLATE:
            form = self.reference_template_form()
            form.validate_or_raise(value)
            value = {"format": value["format"]}
        self._configuration.upsert(tab.config_key, value, self.entity)
        logger.debug(f"{label} of '{self.entity}' saved")
        self.refresh()
        return tab.invalidates
