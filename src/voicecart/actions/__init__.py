"""Action schema registry."""

from .catalog import build_action_registry
from .models import ActionInput
from .registry import ActionParameter, ActionRegistry, ActionSchema, ActionSpec, Declaration

__all__ = [
    "ActionInput",
    "ActionParameter",
    "ActionRegistry",
    "ActionSchema",
    "ActionSpec",
    "Declaration",
    "build_action_registry",
]
