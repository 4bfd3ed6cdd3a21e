"""Assistant mount: wires session, dispatcher, flows and app events together."""

from __future__ import annotations

import uuid

from loguru import logger

from voicecart.actions import ActionRegistry, build_action_registry
from voicecart.config import Settings
from voicecart.dispatcher import ToolCallDispatcher
from voicecart.events import AppEvents
from voicecart.flows import CrossFlowStateMachine
from voicecart.logging_utils import bind_session
from voicecart.routes import RouteContext
from voicecart.session.base import LiveSession
from voicecart.session.bridge import SessionBridge
from voicecart.types import Unsubscribe
from voicecart.ui.affordances import AffordanceAdapter, Navigator
from voicecart.ui.locator import AffordanceLocator


class NavAssistant:
    """One mount of the voice navigation assistant.

    ``mount()`` configures the session and registers exactly one tool-call
    handler plus the app event subscriptions; ``unmount()`` removes all of
    them and cancels the login poll and any scheduled follow-ups.
    """

    def __init__(
        self,
        session: LiveSession,
        adapter: AffordanceAdapter,
        navigator: Navigator,
        events: AppEvents,
        *,
        settings: Settings,
        registry: ActionRegistry | None = None,
    ) -> None:
        self.session = session
        self.events = events
        self.settings = settings
        self.registry = registry or build_action_registry()
        self.routes = RouteContext()
        self.bridge = SessionBridge(session, settings)
        self.locator = AffordanceLocator(adapter, settle_delay=settings.settle_delay_seconds)
        self.flows = CrossFlowStateMachine(
            self.bridge,
            self.locator,
            self.routes,
            poll_interval=settings.poll_interval_seconds,
        )
        self.dispatcher = ToolCallDispatcher(self.registry, self.bridge, self.locator, navigator, self.flows)
        self.mount_id = uuid.uuid4().hex[:8]
        self._unsubscribers: list[Unsubscribe] = []

    @property
    def mounted(self) -> bool:
        return bool(self._unsubscribers)

    def mount(self) -> None:
        if self.mounted:
            return
        bind_session(self.mount_id)
        self.flows.reset()
        self.bridge.configure(self.registry.declare())
        self._unsubscribers = [
            self.session.on_tool_call(self.dispatcher.handle_batch),
            self.events.on_location(self.routes.on_location),
            self.events.on_rewards_prompt(self.flows.on_rewards_prompt),
            self.events.on_item_added(self.flows.on_item_added),
            self.bridge.on_disconnect(self.flows.on_disconnect),
        ]
        self.bridge.mount()
        logger.info("assistant.mount id={} actions={}", self.mount_id, len(self.registry.names()))

    def unmount(self) -> None:
        if not self.mounted:
            return
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.bridge.unmount()
        self.flows.close()
        self.dispatcher.close()
        self.locator.cancel_pending()
        logger.info("assistant.unmount id={}", self.mount_id)

    async def __aenter__(self) -> NavAssistant:
        self.mount()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unmount()
