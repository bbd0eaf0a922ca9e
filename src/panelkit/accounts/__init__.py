"""Panel accounts."""

from panelkit.accounts.service import AccountsService
from panelkit.accounts.types import AccountCreate, AccountUpdate, AccountView

__all__ = ["AccountCreate", "AccountUpdate", "AccountView", "AccountsService"]
