"""Account management endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from panelkit.accounts.types import AccountCreate, AccountUpdate, AccountView
from panelkit.api.deps import CreatorAccount, CurrentAccount, PanelDep

router = APIRouter(prefix="/api/account", tags=["Accounts"])


@router.get("", response_model=list[AccountView])
def list_accounts(panel: PanelDep, account: CurrentAccount) -> list[AccountView]:
    return panel.accounts.list_accounts()


@router.post("", response_model=AccountView, status_code=status.HTTP_201_CREATED)
def create_account(payload: AccountCreate, panel: PanelDep, account: CreatorAccount) -> AccountView:
    return panel.accounts.create(payload)


@router.get("/{username}", response_model=AccountView)
def get_account(username: str, panel: PanelDep, account: CurrentAccount) -> AccountView:
    """
    Public details of one account. 404 when it does not exist.
    """
    return panel.accounts.get(username)


@router.delete("/{username}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(username: str, panel: PanelDep, account: CreatorAccount) -> Response:
    """
    Delete an account. The signed-in account cannot delete itself (400).
    """
    panel.accounts.delete(username, current_username=account.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{username}", response_model=AccountView)
def update_account(
    username: str,
    changes: AccountUpdate,
    panel: PanelDep,
    account: CreatorAccount,
) -> AccountView:
    """
    Update ``name``, ``role``, ``systemProfile`` or ``password``.
    """
    return panel.accounts.update(username, changes)
