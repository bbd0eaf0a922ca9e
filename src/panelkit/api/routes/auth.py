"""Sign-in."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter

from panelkit.accounts.security import create_access_token
from panelkit.accounts.types import AccountView, AuthToken, SignInRequest
from panelkit.api.deps import CurrentAccount, PanelDep

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/signin", response_model=AuthToken)
def signin(credentials: SignInRequest, panel: PanelDep) -> AuthToken:
    """
    Exchange username and password for a bearer token. The token lives for
    the ``tokenValidityDurationInDays`` system setting.
    """
    account = panel.accounts.authenticate(credentials.username, credentials.password)
    days = panel.configuration.get_system_settings("tokenValidityDurationInDays")
    token = create_access_token(account.username, panel.settings.auth_secret, timedelta(days=days))
    return AuthToken(token=token)


@router.get("/me", response_model=AccountView)
def me(account: CurrentAccount) -> AccountView:
    return account
