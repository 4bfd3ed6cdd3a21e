"""Live session contract, lifecycle bridge and adapters."""

from .base import GenerationConfig, LiveConfig, LiveSession, Part, StateHandler, ToolCallHandler
from .bridge import SessionBridge

__all__ = [
    "GenerationConfig",
    "LiveConfig",
    "LiveSession",
    "Part",
    "SessionBridge",
    "StateHandler",
    "ToolCallHandler",
]
