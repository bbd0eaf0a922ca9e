"""Request dependencies: the panel instance and the signed-in account."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from panelkit.accounts.security import decode_access_token
from panelkit.accounts.types import AccountView
from panelkit.core.engine import PanelKit
from panelkit.exceptions import AccountNotFoundError

# Provides the bearer token from the Authorization header and documents the
# scheme in the OpenAPI schema.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/signin", auto_error=False)


def get_panel(request: Request) -> PanelKit:
    return request.app.state.panel


PanelDep = Annotated[PanelKit, Depends(get_panel)]


def get_current_account(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    panel: PanelDep,
) -> AccountView:
    """
    Dependency to get the signed-in account from its bearer token.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    username = decode_access_token(token, panel.settings.auth_secret)
    if username is None:
        raise credentials_exception

    try:
        return panel.accounts.get(username)
    except AccountNotFoundError:
        raise credentials_exception from None


CurrentAccount = Annotated[AccountView, Depends(get_current_account)]


def require_creator(account: CurrentAccount) -> AccountView:
    """
    Dependency for endpoints that change the panel; viewers may only read.
    """
    if account.role != "creator":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only creators can perform this action",
        )
    return account


CreatorAccount = Annotated[AccountView, Depends(require_creator)]
