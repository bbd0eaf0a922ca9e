"""Account management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from panelkit.accounts.security import get_password_hash, verify_password
from panelkit.accounts.types import AccountCreate, AccountUpdate, AccountView
from panelkit.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InvalidCredentialsError,
    SelfDeletionError,
)
from panelkit.persistence.models import AccountRecord, Base

if TYPE_CHECKING:
    from panelkit.core.connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _to_view(record: AccountRecord) -> AccountView:
    return AccountView.model_validate(record.to_dict())


class AccountsService:
    """CRUD over ``panelkit_accounts``.

    Reads return ``AccountView`` so password hashes never leave the service.
    """

    def __init__(self, connection: DatabaseConnection) -> None:
        self._connection = connection
        self._initialized = False

    def setup(self) -> None:
        """Create panelkit tables if they don't exist."""
        if not self._initialized:
            Base.metadata.create_all(self._connection.engine)
            self._initialized = True

    def _get_session(self) -> Session:
        self.setup()
        return self._connection.get_session()

    def _get_record(self, session: Session, username: str) -> AccountRecord:
        record = session.get(AccountRecord, username)
        if record is None:
            raise AccountNotFoundError(username)
        return record

    def create(self, account: AccountCreate) -> AccountView:
        """Create an account.

        Raises:
            AccountAlreadyExistsError: If the username is taken
        """
        with self._get_session() as session:
            if session.get(AccountRecord, account.username) is not None:
                raise AccountAlreadyExistsError(account.username)

            record = AccountRecord(
                username=account.username,
                password=get_password_hash(account.password),
                name=account.name,
                role=account.role,
                system_profile=account.system_profile,
            )
            session.add(record)
            session.commit()
            logger.info(f"Account '{account.username}' created")
            return _to_view(record)

    def get(self, username: str) -> AccountView:
        """Return one account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        with self._get_session() as session:
            return _to_view(self._get_record(session, username))

    def exists(self, username: str) -> bool:
        """Check whether ``username`` is taken."""
        with self._get_session() as session:
            return session.get(AccountRecord, username) is not None

    def list_accounts(self) -> list[AccountView]:
        """All accounts, ordered by username."""
        with self._get_session() as session:
            records = session.scalars(select(AccountRecord).order_by(AccountRecord.username)).all()
            return [_to_view(record) for record in records]

    def update(self, username: str, changes: AccountUpdate) -> AccountView:
        """Apply the fields set in ``changes``; everything else stays as is."""
        with self._get_session() as session:
            record = self._get_record(session, username)
            values = changes.model_dump(exclude_unset=True)

            password = values.pop("password", None)
            if password is not None:
                record.password = get_password_hash(password)
            for field_name, value in values.items():
                setattr(record, field_name, value)

            session.commit()
            logger.info(f"Account '{username}' updated: {', '.join(sorted(values)) or 'password'}")
            return _to_view(record)

    def delete(self, username: str, current_username: str | None = None) -> None:
        """Delete an account.

        Args:
            username: Account to delete
            current_username: The signed-in account, which may not delete itself

        Raises:
            SelfDeletionError: If ``username`` is the signed-in account
            AccountNotFoundError: If the account does not exist
        """
        if current_username is not None and username == current_username:
            raise SelfDeletionError(username)

        with self._get_session() as session:
            record = self._get_record(session, username)
            session.delete(record)
            session.commit()
        logger.info(f"Account '{username}' deleted")

    def verify_password(self, username: str, password: str) -> bool:
        """Check ``password`` against the stored hash."""
        with self._get_session() as session:
            record = session.get(AccountRecord, username)
            return record is not None and verify_password(password, record.password)

    def authenticate(self, username: str, password: str) -> AccountView:
        """Return the account when the password matches.

        Raises:
            InvalidCredentialsError: If the username or password is wrong
        """
        if not self.verify_password(username, password):
            raise InvalidCredentialsError()
        return self.get(username)
