"""Application-level exception types for voicecart."""

from __future__ import annotations


class VoiceCartError(Exception):
    """Base exception for voicecart."""


class ConfigurationError(VoiceCartError):
    """Base exception for configuration and startup validation errors."""


class ApiKeyNotConfiguredError(ConfigurationError):
    """Raised when the live session API key is missing."""


class ActionParityError(ConfigurationError):
    """Raised when declared actions and dispatcher handlers diverge."""

    def __init__(self, *, undeclared: set[str], unhandled: set[str]) -> None:
        self.undeclared = undeclared
        self.unhandled = unhandled
        parts: list[str] = []
        if undeclared:
            parts.append(f"handled but not declared: {', '.join(sorted(undeclared))}")
        if unhandled:
            parts.append(f"declared but not handled: {', '.join(sorted(unhandled))}")
        super().__init__("; ".join(parts) or "action parity mismatch")


class SessionError(VoiceCartError):
    """Base exception for live session failures."""


class SessionNotConfiguredError(SessionError):
    """Raised when connecting a live session before set_config."""
