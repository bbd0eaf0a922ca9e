"""Custom exceptions for panelkit.

Every error carries a human readable message plus a ``context`` dict, so the
API and the CLI can report it without knowing the concrete subclass.
"""

from __future__ import annotations

from typing import Any


class PanelKitError(Exception):
    """Base exception for all panelkit errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConnectionError(PanelKitError):
    """Failed to connect to a database."""

    pass


class IntrospectionError(PanelKitError):
    """Reading the data source catalog failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Schema introspection failed: {reason}", {"reason": reason})
        self.reason = reason


class EntityNotFoundError(PanelKitError):
    """Entity does not exist in the introspected schema."""

    def __init__(self, entity_name: str, available_entities: list[str] | None = None) -> None:
        available = available_entities or []
        if available:
            message = (
                f"Entity '{entity_name}' not found. Available entities: {', '.join(available)}"
            )
        else:
            message = f"Entity '{entity_name}' not found. The schema has no entities."

        super().__init__(message, {"entity_name": entity_name, "available_entities": available})
        self.entity_name = entity_name
        self.available_entities = available


class ConfigurationKeyError(PanelKitError):
    """Unknown configuration key."""

    def __init__(self, key: str, valid_keys: list[str]) -> None:
        message = f"Invalid configuration key '{key}'. Valid keys: {', '.join(valid_keys)}"
        super().__init__(message, {"key": key, "valid_keys": valid_keys})
        self.key = key


class CredentialsNotFoundError(PanelKitError):
    """No value stored for a credential group."""

    def __init__(self, group: str) -> None:
        message = f"No credentials configured for group '{group}'."
        super().__init__(message, {"group": group})
        self.group = group


class ValidationError(PanelKitError):
    """Input validation failed."""

    def __init__(self, message: str, field_errors: dict[str, str] | None = None) -> None:
        super().__init__(message, {"field_errors": field_errors or {}})
        self.field_errors = field_errors or {}


class AccountNotFoundError(PanelKitError):
    """Account with given username does not exist."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Account '{username}' not found.", {"username": username})
        self.username = username


class AccountAlreadyExistsError(PanelKitError):
    """Account username is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Account '{username}' already exists.", {"username": username})
        self.username = username


class SelfDeletionError(PanelKitError):
    """The signed-in account tried to delete itself."""

    def __init__(self, username: str) -> None:
        super().__init__(
            f"Account '{username}' is signed in and cannot delete itself.",
            {"username": username},
        )
        self.username = username


class InvalidCredentialsError(PanelKitError):
    """Username/password pair or token was rejected."""

    def __init__(self, message: str = "Invalid username or password.") -> None:
        super().__init__(message)


class ActionNotFoundError(PanelKitError):
    """Action key is not registered."""

    def __init__(self, action_key: str, available_actions: list[str] | None = None) -> None:
        available = available_actions or []
        message = f"Action '{action_key}' not found."
        if available:
            message = f"{message} Available actions: {', '.join(available)}"
        super().__init__(message, {"action_key": action_key, "available_actions": available})
        self.action_key = action_key


class ActivationNotFoundError(PanelKitError):
    """Activation id does not exist."""

    def __init__(self, activation_id: str) -> None:
        super().__init__(
            f"Activated action '{activation_id}' not found.", {"activation_id": activation_id}
        )
        self.activation_id = activation_id
