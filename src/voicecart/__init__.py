"""voicecart - voice-driven shopping assistant for a storefront."""

from .actions import ActionRegistry, build_action_registry
from .assistant import NavAssistant
from .dispatcher import ToolCallDispatcher
from .flows import CrossFlowStateMachine

__version__ = "0.1.0"

__all__ = ["ActionRegistry", "CrossFlowStateMachine", "NavAssistant", "ToolCallDispatcher", "build_action_registry"]
