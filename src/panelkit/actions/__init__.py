"""Actions and their activations."""

from panelkit.actions.registry import ActionDefinition, ActionsRegistry, ActivatedAction
from panelkit.actions.service import ActionsService

__all__ = ["ActionDefinition", "ActionsRegistry", "ActionsService", "ActivatedAction"]
