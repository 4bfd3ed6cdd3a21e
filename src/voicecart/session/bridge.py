"""Session lifecycle bridge."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from voicecart.actions.registry import Declaration
from voicecart.config import Settings
from voicecart.prompts import GREETING
from voicecart.session.base import GenerationConfig, LiveConfig, LiveSession
from voicecart.types import SessionState, Unsubscribe


class SessionBridge:
    """Own the live session handle for one mount.

    ``has_greeted`` is tracked apart from the connection state so reconnect
    churn inside one mount never produces a second greeting.
    """

    def __init__(self, session: LiveSession, settings: Settings) -> None:
        self.session = session
        self.settings = settings
        self.has_greeted = False
        self.config: LiveConfig | None = None
        self._disconnect_handlers: list[Callable[[], None]] = []
        self._unsub_state: Unsubscribe | None = None

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def connected(self) -> bool:
        return self.session.state is SessionState.CONNECTED

    def configure(self, declaration: Declaration) -> LiveConfig:
        config = LiveConfig(
            model=self.settings.model,
            tools=declaration.tools(),
            system_instruction=declaration.system_instruction,
            generation_config=GenerationConfig(
                response_modality=self.settings.response_modality,
                voice_name=self.settings.voice_name,
            ),
        )
        self.session.set_config(config)
        self.config = config
        logger.info("session.configure model={} actions={}", config.model, len(declaration.schemas))
        return config

    def mount(self) -> None:
        if self._unsub_state is not None:
            return
        self.has_greeted = False
        self._unsub_state = self.session.on_state_change(self._on_state_change)
        if self.connected:
            self._greet_once()

    def unmount(self) -> None:
        if self._unsub_state is not None:
            self._unsub_state()
            self._unsub_state = None
        self._disconnect_handlers.clear()

    async def ensure_connected(self) -> None:
        if self.connected:
            return
        logger.info("session.connect.start state={}", self.state)
        await self.session.connect()
        logger.info("session.connect.end state={}", self.state)

    def send(self, text: str) -> None:
        logger.info("session.send state={} text={}", self.state, text)
        self.session.send([{"text": text}])

    def on_disconnect(self, handler: Callable[[], None]) -> Unsubscribe:
        self._disconnect_handlers.append(handler)
        return lambda: self._remove_disconnect_handler(handler)

    def _remove_disconnect_handler(self, handler: Callable[[], None]) -> None:
        if handler in self._disconnect_handlers:
            self._disconnect_handlers.remove(handler)

    def _on_state_change(self, state: SessionState) -> None:
        logger.info("session.state state={}", state)
        if state is SessionState.CONNECTED:
            self._greet_once()
        elif state is SessionState.DISCONNECTED:
            for handler in list(self._disconnect_handlers):
                try:
                    handler()
                except Exception:
                    logger.exception("session.disconnect_handler.error")

    def _greet_once(self) -> None:
        if self.has_greeted:
            return
        self.has_greeted = True
        self.send(GREETING)
