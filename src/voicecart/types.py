"""Shared value types."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeAlias


@dataclass(frozen=True)
class ToolCall:
    """One structured action emitted by the live model."""

    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)
    id: str | None = None


class SessionState(StrEnum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class ActivationResult(StrEnum):
    OK = "ok"
    DISABLED = "disabled"
    NOT_FOUND = "notFound"


Unsubscribe: TypeAlias = Callable[[], None]
