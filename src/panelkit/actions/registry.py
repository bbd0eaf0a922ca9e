"""Registry of actions that can be activated."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from panelkit.core.types import CamelModel
from panelkit.exceptions import ActionNotFoundError

REQUIRED = {"validationType": "required"}


class ActionDefinition(CamelModel):
    """An action and the configuration an activation of it needs."""

    key: str
    title: str
    description: str = ""
    configuration_schema: dict[str, dict[str, Any]] = Field(default_factory=dict)


class ActivatedAction(CamelModel):
    """An enabled instance of an action."""

    activation_id: str
    integration_key: str
    active: bool = True


class ActionsRegistry:
    """Holds action definitions by key."""

    def __init__(self, register_defaults: bool = True) -> None:
        self._actions: dict[str, ActionDefinition] = {}
        if register_defaults:
            self._register_default_actions()

    def _register_default_actions(self) -> None:
        self.register(
            ActionDefinition(
                key="http",
                title="HTTP",
                description="Send an HTTP request when the action runs",
                configuration_schema={
                    "url": {"type": "url", "validations": [REQUIRED, {"validationType": "isUrl"}]},
                    "headers": {"type": "textarea", "validations": []},
                },
            )
        )
        self.register(
            ActionDefinition(
                key="smtp",
                title="SMTP",
                description="Send emails through an SMTP server",
                configuration_schema={
                    "host": {"type": "text", "validations": [REQUIRED]},
                    "port": {
                        "type": "number",
                        "validations": [REQUIRED, {"validationType": "isNumber"}],
                    },
                    "username": {"type": "text", "validations": [REQUIRED]},
                    "password": {"type": "password", "validations": [REQUIRED]},
                    "senderEmail": {
                        "type": "email",
                        "label": "Sender Email",
                        "validations": [REQUIRED, {"validationType": "isEmail"}],
                    },
                },
            )
        )
        self.register(
            ActionDefinition(
                key="slack",
                title="Slack",
                description="Post messages to a Slack channel",
                configuration_schema={
                    "webhookUrl": {
                        "type": "url",
                        "label": "Webhook URL",
                        "validations": [REQUIRED, {"validationType": "isUrl"}],
                    },
                },
            )
        )

    def register(self, action: ActionDefinition) -> ActionDefinition:
        """Add or replace an action definition."""
        self._actions[action.key] = action
        return action

    def get(self, key: str) -> ActionDefinition:
        """Return an action definition.

        Raises:
            ActionNotFoundError: If no action is registered under ``key``
        """
        action = self._actions.get(key)
        if action is None:
            raise ActionNotFoundError(key, self.list_keys())
        return action

    def list_keys(self) -> list[str]:
        """Registered action keys, sorted."""
        return sorted(self._actions)

    def get_all(self) -> list[ActionDefinition]:
        """All action definitions, sorted by key."""
        return [self._actions[key] for key in self.list_keys()]
