"""Live session contract consumed by the bridge and the dispatcher."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeAlias

from pydantic import BaseModel, Field

from voicecart.types import SessionState, ToolCall, Unsubscribe

Part: TypeAlias = dict[str, str]
ToolCallHandler = Callable[[Sequence[ToolCall]], Any]
StateHandler = Callable[[SessionState], None]


class GenerationConfig(BaseModel):
    response_modality: str = "AUDIO"
    voice_name: str = "Aoede"


class LiveConfig(BaseModel):
    """Model, tools and instructions handed to the live session before connecting."""

    model: str
    tools: list[dict[str, Any]] = Field(default_factory=list)
    system_instruction: str = ""
    generation_config: GenerationConfig = Field(default_factory=GenerationConfig)


class LiveSession(Protocol):
    """Bidirectional channel to the conversational model."""

    @property
    def state(self) -> SessionState: ...

    def set_config(self, config: LiveConfig) -> None: ...

    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...

    def send(self, parts: Sequence[Part]) -> None: ...

    def on_tool_call(self, handler: ToolCallHandler) -> Unsubscribe: ...

    def on_state_change(self, handler: StateHandler) -> Unsubscribe: ...
