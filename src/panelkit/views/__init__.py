"""View-models of the settings screens.

Plain objects that describe what a screen shows and what a submission
writes. Rendering is left to the client.
"""

from panelkit.views.actions import (
    ActionConfigure,
    ConfigurationForm,
    NoConfiguration,
    PasswordPrompt,
    PasswordStore,
    configure_view,
)
from panelkit.views.forms import (
    FormField,
    FormFieldType,
    FormSchema,
    Validation,
    build_create_entity_form,
    build_form,
)
from panelkit.views.selection import EntitiesSelection
from panelkit.views.settings import EntityRelationsSettings, SettingsTab
from panelkit.views.state import Error, Loading, QueryResult, Ready, ViewState, combine_states

__all__ = [
    "ActionConfigure",
    "ConfigurationForm",
    "EntitiesSelection",
    "EntityRelationsSettings",
    "Error",
    "FormField",
    "FormFieldType",
    "FormSchema",
    "Loading",
    "NoConfiguration",
    "PasswordPrompt",
    "PasswordStore",
    "QueryResult",
    "Ready",
    "SettingsTab",
    "Validation",
    "ViewState",
    "build_create_entity_form",
    "build_form",
    "combine_states",
]
