"""Gemini Live session adapter."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from google import genai
from loguru import logger

from voicecart.config import Settings
from voicecart.errors import SessionError, SessionNotConfiguredError
from voicecart.session.base import LiveConfig, Part, StateHandler, ToolCallHandler
from voicecart.types import SessionState, ToolCall, Unsubscribe


def build_connect_config(config: LiveConfig) -> dict[str, Any]:
    """Render a :class:`LiveConfig` as a live connect config dict."""
    generation = config.generation_config
    return {
        "response_modalities": [generation.response_modality],
        "speech_config": {"voice_config": {"prebuilt_voice_config": {"voice_name": generation.voice_name}}},
        "system_instruction": {"parts": [{"text": config.system_instruction}]},
        "tools": config.tools,
    }


def tool_calls_from_message(message: Any) -> list[ToolCall]:
    tool_call = getattr(message, "tool_call", None)
    if tool_call is None:
        return []
    calls: list[ToolCall] = []
    for function_call in tool_call.function_calls or []:
        calls.append(
            ToolCall(
                name=function_call.name or "",
                arguments=dict(function_call.args or {}),
                id=function_call.id,
            )
        )
    return calls


class GeminiLiveSession:
    """Live session over ``client.aio.live``.

    Outgoing sends are queued and drained by one sender task, so callers stay
    fire-and-forget and the order of sends is preserved. Sends issued while
    disconnected wait in the queue until the next connection.
    """

    def __init__(self, settings: Settings, *, client: genai.Client | None = None) -> None:
        self.settings = settings
        self._client = client
        self._config: LiveConfig | None = None
        self._state = SessionState.DISCONNECTED
        self._outgoing: asyncio.Queue[list[Part]] = asyncio.Queue()
        self._runner: asyncio.Task[None] | None = None
        self._ready: asyncio.Event | None = None
        self._tool_handlers: list[ToolCallHandler] = []
        self._state_handlers: list[StateHandler] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def set_config(self, config: LiveConfig) -> None:
        self._config = config

    async def connect(self) -> None:
        if self._config is None:
            raise SessionNotConfiguredError("set_config must be called before connect")
        if self._state is SessionState.CONNECTED:
            return
        if self._runner is None or self._runner.done():
            self._ready = asyncio.Event()
            self._set_state(SessionState.CONNECTING)
            self._runner = asyncio.create_task(self._run(self._config))
        if self._ready is None:
            raise SessionError("live session has no pending connection")
        await self._ready.wait()
        if self._state is not SessionState.CONNECTED:
            raise SessionError("live session failed to connect")

    async def disconnect(self) -> None:
        runner, self._runner = self._runner, None
        if runner is None:
            return
        runner.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await runner

    def send(self, parts: Sequence[Part]) -> None:
        self._outgoing.put_nowait(list(parts))

    def on_tool_call(self, handler: ToolCallHandler) -> Unsubscribe:
        return _subscribe(self._tool_handlers, handler)

    def on_state_change(self, handler: StateHandler) -> Unsubscribe:
        return _subscribe(self._state_handlers, handler)

    def _client_or_build(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(
                api_key=self.settings.require_api_key(),
                http_options={"api_version": self.settings.api_version},
            )
        return self._client

    async def _run(self, config: LiveConfig) -> None:
        try:
            client = self._client_or_build()
            async with client.aio.live.connect(model=config.model, config=build_connect_config(config)) as live:
                self._set_state(SessionState.CONNECTED)
                self._mark_ready()
                sender = asyncio.create_task(self._send_loop(live))
                try:
                    await self._receive_loop(live)
                finally:
                    sender.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await sender
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("session.gemini.error model={}", config.model)
        finally:
            self._set_state(SessionState.DISCONNECTED)
            self._mark_ready()

    async def _send_loop(self, live: Any) -> None:
        while True:
            parts = await self._outgoing.get()
            await live.send_client_content(turns={"role": "user", "parts": parts}, turn_complete=True)

    async def _receive_loop(self, live: Any) -> None:
        # receive() ends after each completed turn
        while True:
            async for message in live.receive():
                calls = tool_calls_from_message(message)
                if calls:
                    self._emit_tool_calls(calls)

    def _emit_tool_calls(self, calls: list[ToolCall]) -> None:
        logger.info("session.toolcall names={}", [call.name for call in calls])
        for handler in list(self._tool_handlers):
            try:
                handler(calls)
            except Exception:
                logger.exception("session.toolcall_handler.error")

    def _set_state(self, state: SessionState) -> None:
        if state is self._state:
            return
        self._state = state
        for handler in list(self._state_handlers):
            try:
                handler(state)
            except Exception:
                logger.exception("session.state_handler.error state={}", state)

    def _mark_ready(self) -> None:
        if self._ready is not None:
            self._ready.set()


H = TypeVar("H")


def _subscribe(handlers: list[H], handler: H) -> Callable[[], None]:
    handlers.append(handler)

    def _unsubscribe() -> None:
        if handler in handlers:
            handlers.remove(handler)

    return _unsubscribe
