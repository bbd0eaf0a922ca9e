"""Activated actions and their configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from panelkit.actions.registry import ActionDefinition, ActionsRegistry, ActivatedAction
from panelkit.exceptions import ActivationNotFoundError, InvalidCredentialsError
from panelkit.views.forms import build_form

if TYPE_CHECKING:
    from panelkit.accounts.service import AccountsService
    from panelkit.credentials.service import CredentialsService
    from panelkit.persistence.base import ConfigDomainPersistence

logger = logging.getLogger(__name__)


def _configuration_group(activation_id: str) -> str:
    return f"ACTION__{activation_id}"


class ActionsService:
    """Activates actions and guards their configuration.

    Activations live in the ``activated_actions`` domain; their configuration
    is kept as a credential group because it usually holds secrets. Reading
    it back requires the caller's account password.
    """

    def __init__(
        self,
        registry: ActionsRegistry,
        persistence: ConfigDomainPersistence,
        credentials_service: CredentialsService,
        accounts_service: AccountsService,
    ) -> None:
        self._registry = registry
        self._persistence = persistence
        self._credentials = credentials_service
        self._accounts = accounts_service

    def setup(self) -> None:
        """Prepare the backing store."""
        self._persistence.setup()

    def list_actions(self) -> list[ActionDefinition]:
        """Every registered action."""
        return self._registry.get_all()

    def get_action(self, key: str) -> ActionDefinition:
        """One action definition."""
        return self._registry.get(key)

    def list_activated_actions(self) -> list[ActivatedAction]:
        """Every activation."""
        return [ActivatedAction.model_validate(item) for item in self._persistence.get_all_items()]

    def get_activated_action(self, activation_id: str) -> ActivatedAction:
        """One activation.

        Raises:
            ActivationNotFoundError: If the activation does not exist
        """
        item = self._persistence.get_item(activation_id)
        if item is None:
            raise ActivationNotFoundError(activation_id)
        return ActivatedAction.model_validate(item)

    def activate_action(self, integration_key: str, configuration: dict[str, Any]) -> ActivatedAction:
        """Enable an action with its configuration.

        Raises:
            ActionNotFoundError: If the action is not registered
            ValidationError: If the configuration does not satisfy the action's schema
        """
        action = self._registry.get(integration_key)
        build_form(action.configuration_schema).validate_or_raise(configuration)

        activation = ActivatedAction(activation_id=str(uuid4()), integration_key=integration_key)
        group = _configuration_group(activation.activation_id)
        # An activation is only listed once its configuration is stored
        self._credentials.upsert_group_value(group, configuration)
        try:
            self._persistence.upsert_item(
                activation.activation_id, activation.model_dump(by_alias=True)
            )
        except Exception:
            self._credentials.remove_group(group)
            raise
        logger.info(f"Action '{integration_key}' activated as {activation.activation_id}")
        return activation

    def deactivate_action(self, activation_id: str) -> None:
        """Remove an activation and its configuration."""
        self.get_activated_action(activation_id)
        self._persistence.remove_item(activation_id)
        self._credentials.remove_group(_configuration_group(activation_id))
        logger.info(f"Activation {activation_id} removed")

    def get_activation_configuration(
        self,
        activation_id: str,
        password: str,
        username: str,
    ) -> dict[str, Any]:
        """Reveal an activation's configuration after re-checking the password.

        Raises:
            InvalidCredentialsError: If ``password`` is not the account's password
            ActivationNotFoundError: If the activation does not exist
        """
        if not self._accounts.verify_password(username, password):
            raise InvalidCredentialsError("Invalid password.")
        self.get_activated_action(activation_id)
        return self._credentials.use_group_value(_configuration_group(activation_id))

    def update_activation_configuration(
        self,
        activation_id: str,
        configuration: dict[str, Any],
    ) -> None:
        """Replace an activation's configuration after validating it."""
        activation = self.get_activated_action(activation_id)
        action = self._registry.get(activation.integration_key)
        build_form(action.configuration_schema).validate_or_raise(configuration)
        self._credentials.upsert_group_value(_configuration_group(activation_id), configuration)
        logger.info(f"Configuration of activation {activation_id} updated")
