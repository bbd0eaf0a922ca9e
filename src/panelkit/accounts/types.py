"""Account input/output types."""

from __future__ import annotations

from pydantic import Field, field_validator

from panelkit.core.types import CamelModel

SYSTEM_ROLES = ("creator", "viewer")


class AccountView(CamelModel):
    """Public projection of an account. Never carries the password."""

    username: str
    name: str
    role: str
    system_profile: str | None = None


class AccountCreate(CamelModel):
    """Input for creating an account."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(default="viewer", min_length=1, max_length=64)
    system_profile: str | None = None


class AccountUpdate(CamelModel):
    """Partial update; only fields that are set get written."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    role: str | None = Field(default=None, min_length=1, max_length=64)
    system_profile: str | None = None
    password: str | None = Field(default=None, min_length=1)

    @field_validator("name", "role", "password")
    @classmethod
    def not_null(cls, value: str | None) -> str:
        # Leave the field out to keep the current value; null is not a value here
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class SignInRequest(CamelModel):
    """Credentials posted to the sign-in endpoint."""

    username: str
    password: str


class AuthToken(CamelModel):
    """Issued bearer token."""

    token: str
    token_type: str = "bearer"
