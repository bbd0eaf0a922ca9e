"""Action endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Response, status
from pydantic import BaseModel

from panelkit.actions.registry import ActionDefinition, ActivatedAction
from panelkit.api.deps import CreatorAccount, CurrentAccount, PanelDep

router = APIRouter(prefix="/api/actions", tags=["Actions"])


class RevealRequest(BaseModel):
    password: str


@router.get("", response_model=list[ActionDefinition])
def list_actions(panel: PanelDep, account: CurrentAccount) -> list[ActionDefinition]:
    return panel.actions.list_actions()


@router.get("/active", response_model=list[ActivatedAction])
def list_activated_actions(panel: PanelDep, account: CurrentAccount) -> list[ActivatedAction]:
    return panel.actions.list_activated_actions()


@router.post("/{key}", response_model=ActivatedAction, status_code=status.HTTP_201_CREATED)
def activate_action(
    key: str,
    panel: PanelDep,
    account: CreatorAccount,
    configuration: dict[str, Any] | None = Body(default=None),
) -> ActivatedAction:
    return panel.actions.activate_action(key, configuration or {})


@router.delete("/active/{activation_id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_action(activation_id: str, panel: PanelDep, account: CreatorAccount) -> Response:
    panel.actions.deactivate_action(activation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/active/{activation_id}/configuration", response_model=dict[str, Any])
def reveal_configuration(
    activation_id: str,
    payload: RevealRequest,
    panel: PanelDep,
    account: CreatorAccount,
) -> dict[str, Any]:
    """
    Return the stored configuration. The account password is checked again.
    """
    return panel.actions.get_activation_configuration(
        activation_id, password=payload.password, username=account.username
    )


@router.patch("/active/{activation_id}/configuration", status_code=status.HTTP_204_NO_CONTENT)
def update_configuration(
    activation_id: str,
    panel: PanelDep,
    account: CreatorAccount,
    configuration: dict[str, Any] = Body(...),
) -> Response:
    panel.actions.update_activation_configuration(activation_id, configuration)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
