"""Credentials storage."""

from panelkit.credentials.service import DATABASE_CREDENTIAL_GROUP, CredentialsService

__all__ = ["CredentialsService", "DATABASE_CREDENTIAL_GROUP"]
