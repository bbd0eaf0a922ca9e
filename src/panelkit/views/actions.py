"""Configure view of an activated action.

The stored configuration is only shown once the account password has been
entered. This gate lives in the view; ``ActionsService`` checks the password
again when the configuration is fetched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from panelkit.exceptions import PanelKitError
from panelkit.views.forms import FormSchema, build_form
from panelkit.views.state import QueryResult

if TYPE_CHECKING:
    from panelkit.actions.registry import ActionDefinition
    from panelkit.actions.service import ActionsService

LOADING_BUTTON_TEXT = "Just a sec..."
UPDATE_BUTTON_TEXT = "Update Configuration"

PASSWORD_FORM_SCHEMA = {
    "password": {"type": "password", "validations": [{"validationType": "required"}]},
}


class PasswordStore:
    """Holds the password entered on the configure screen for the session."""

    def __init__(self) -> None:
        self.password: str | None = None

    def set_password(self, password: str) -> None:
        self.password = password

    def clear(self) -> None:
        self.password = None


@dataclass(frozen=True)
class NoConfiguration:
    message: str = "This action does not have configuration"


@dataclass(frozen=True)
class PasswordPrompt:
    form: FormSchema
    message: str = (
        "For security reasons, Please input your account password to reveal "
        "this action configuration"
    )
    error: str | None = None


@dataclass(frozen=True)
class ConfigurationForm:
    form: FormSchema


ConfigureView = NoConfiguration | PasswordPrompt | ConfigurationForm


def reveal_button_text(action: ActionDefinition) -> str:
    return f"Reveal {action.title}'s Configuration"


def configure_view(
    action: ActionDefinition,
    configuration: QueryResult[dict[str, Any]],
    password: str | None,
) -> ConfigureView:
    """Pick what the configure screen shows.

    Actions without a configuration schema have nothing to show. Until a
    password is entered, and while the configuration is loading or failed,
    the password prompt is shown.
    """
    if not action.configuration_schema:
        return NoConfiguration()

    if configuration.error or configuration.is_loading or not password:
        button_text = LOADING_BUTTON_TEXT if configuration.is_loading else reveal_button_text(action)
        return PasswordPrompt(
            form=build_form(PASSWORD_FORM_SCHEMA, button_text=button_text),
            error=configuration.error,
        )

    return ConfigurationForm(
        form=build_form(
            action.configuration_schema,
            button_text=UPDATE_BUTTON_TEXT,
            initial_values=configuration.data or {},
        )
    )


class ActionConfigure:
    """Configure screen of one activation, backed by ``ActionsService``."""

    def __init__(
        self,
        actions_service: ActionsService,
        activation_id: str,
        username: str,
        password_store: PasswordStore | None = None,
    ) -> None:
        self._actions = actions_service
        self.activation_id = activation_id
        self.username = username
        self.password_store = password_store or PasswordStore()
        activation = actions_service.get_activated_action(activation_id)
        self.action = actions_service.get_action(activation.integration_key)

    def _fetch_configuration(self) -> QueryResult[dict[str, Any]]:
        password = self.password_store.password
        if not password:
            return QueryResult()
        return QueryResult.run(
            lambda: self._actions.get_activation_configuration(
                self.activation_id, password=password, username=self.username
            )
        )

    def view(self) -> ConfigureView:
        return configure_view(self.action, self._fetch_configuration(), self.password_store.password)

    def reveal(self, password: str) -> ConfigureView:
        """Submit the password prompt."""
        build_form(PASSWORD_FORM_SCHEMA).validate_or_raise({"password": password})
        self.password_store.set_password(password)
        view = self.view()
        if isinstance(view, PasswordPrompt):
            self.password_store.clear()
        return view

    def update(self, values: dict[str, Any]) -> None:
        """Submit the configuration form."""
        if not self.password_store.password:
            raise PanelKitError("Enter your password before updating the configuration.")
        self._actions.update_activation_configuration(self.activation_id, values)
