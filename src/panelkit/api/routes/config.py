"""Configuration endpoints.

App-wide keys live at ``/api/config/{key}``, entity-scoped keys at
``/api/config/{key}/{entity}``.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, status
from pydantic import BaseModel

from panelkit.api.deps import CreatorAccount, CurrentAccount, PanelDep
from panelkit.configuration.keys import CONFIGURATION_KEYS, list_configuration_keys
from panelkit.core.types import CamelModel

router = APIRouter(prefix="/api/config", tags=["Configuration"])


class ConfigurationValue(BaseModel):
    data: Any


class ConfigurationKeyInfo(CamelModel):
    name: str
    require_entity: bool
    description: str


@router.get("", response_model=list[ConfigurationKeyInfo])
def list_keys(account: CurrentAccount) -> list[ConfigurationKeyInfo]:
    return [
        ConfigurationKeyInfo(
            name=name,
            require_entity=CONFIGURATION_KEYS[name].require_entity,
            description=CONFIGURATION_KEYS[name].description,
        )
        for name in list_configuration_keys()
    ]


@router.get("/{key}", response_model=ConfigurationValue)
def show_app_config(key: str, panel: PanelDep, account: CurrentAccount) -> ConfigurationValue:
    return ConfigurationValue(data=panel.configuration.show(key))


@router.put("/{key}", status_code=status.HTTP_204_NO_CONTENT)
def upsert_app_config(
    key: str,
    panel: PanelDep,
    account: CreatorAccount,
    data: Any = Body(..., embed=True),
) -> None:
    panel.configuration.upsert(key, data)


@router.get("/{key}/{entity}", response_model=ConfigurationValue)
def show_entity_config(
    key: str, entity: str, panel: PanelDep, account: CurrentAccount
) -> ConfigurationValue:
    return ConfigurationValue(data=panel.configuration.show(key, entity))


@router.put("/{key}/{entity}", status_code=status.HTTP_204_NO_CONTENT)
def upsert_entity_config(
    key: str,
    entity: str,
    panel: PanelDep,
    account: CreatorAccount,
    data: Any = Body(..., embed=True),
) -> None:
    panel.configuration.upsert(key, data, entity)
