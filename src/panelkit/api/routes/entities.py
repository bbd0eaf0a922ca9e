"""Entity endpoints derived from the schema and its configuration."""

from __future__ import annotations

from fastapi import APIRouter

from panelkit.api.deps import CreatorAccount, CurrentAccount, PanelDep
from panelkit.core.types import DBSchema, EntityField
from panelkit.entities.service import EntityDiction, ReferenceField
from panelkit.views.forms import FormSchema, build_create_entity_form

router = APIRouter(prefix="/api/entities", tags=["Entities"])


@router.get("", response_model=list[str])
def list_entities(panel: PanelDep, account: CurrentAccount) -> list[str]:
    return panel.entities.list_entities()


@router.get("/all", response_model=list[str])
def list_all_entities(panel: PanelDep, account: CurrentAccount) -> list[str]:
    return panel.entities.list_all_entities()


@router.post("/introspect", response_model=list[DBSchema])
def introspect(panel: PanelDep, account: CreatorAccount) -> list[DBSchema]:
    """
    Re-read the data source schema, replacing the stored copy.
    """
    return panel.schemas.introspect()


@router.get("/{entity}/schema", response_model=DBSchema)
def entity_schema(entity: str, panel: PanelDep, account: CurrentAccount) -> DBSchema:
    return panel.schemas.get_entity_schema(entity)


@router.get("/{entity}/fields", response_model=list[EntityField])
def entity_fields(entity: str, panel: PanelDep, account: CurrentAccount) -> list[EntityField]:
    return panel.entities.get_entity_fields(entity)


@router.get("/{entity}/scalar-fields", response_model=list[EntityField])
def entity_scalar_fields(
    entity: str, panel: PanelDep, account: CurrentAccount
) -> list[EntityField]:
    return panel.entities.get_entity_scalar_fields(entity)


@router.get("/{entity}/relations", response_model=list[str])
def entity_relations(entity: str, panel: PanelDep, account: CurrentAccount) -> list[str]:
    return panel.entities.list_entity_relations(entity)


@router.get("/{entity}/reference-fields", response_model=list[ReferenceField])
def entity_reference_fields(
    entity: str, panel: PanelDep, account: CurrentAccount
) -> list[ReferenceField]:
    return panel.entities.get_entity_reference_fields(entity)


@router.get("/{entity}/diction", response_model=EntityDiction)
def entity_diction(entity: str, panel: PanelDep, account: CurrentAccount) -> EntityDiction:
    return panel.entities.get_entity_diction(entity)


@router.get("/{entity}/create-form", response_model=FormSchema)
def entity_create_form(entity: str, panel: PanelDep, account: CurrentAccount) -> FormSchema:
    """
    Form for creating a row: every non-hidden field, required and at most
    32 characters long.
    """
    hidden = set(panel.configuration.show("hidden_entity_create_columns", entity))
    fields = [
        field
        for field in panel.entities.get_entity_scalar_fields(entity)
        if field.name not in hidden
    ]
    return build_create_entity_form(fields, panel.entities.get_entity_field_labels(entity))
