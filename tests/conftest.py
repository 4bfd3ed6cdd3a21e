from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pytest

from voicecart.assistant import NavAssistant
from voicecart.config import Settings
from voicecart.events import AppEvents, LocationChangedEvent
from voicecart.session.base import LiveConfig, Part, StateHandler, ToolCallHandler
from voicecart.types import SessionState, ToolCall, Unsubscribe
from voicecart.ui.affordances import Affordance


@dataclass
class FakeElement:
    affordance: Affordance
    label: str | None = None
    disabled: bool = False
    value: str | None = None
    clicks: int = 0


class FakeSession:
    def __init__(self, timeline: list[tuple[str, ...]]) -> None:
        self.timeline = timeline
        self.state = SessionState.DISCONNECTED
        self.config: LiveConfig | None = None
        self.sent: list[str] = []
        self.connect_calls = 0
        self.tool_handlers: list[ToolCallHandler] = []
        self.state_handlers: list[StateHandler] = []

    def set_config(self, config: LiveConfig) -> None:
        self.config = config

    async def connect(self) -> None:
        self.connect_calls += 1
        self.set_state(SessionState.CONNECTED)

    async def disconnect(self) -> None:
        self.set_state(SessionState.DISCONNECTED)

    def send(self, parts: Sequence[Part]) -> None:
        for part in parts:
            self.sent.append(part["text"])
            self.timeline.append(("send", part["text"]))

    def on_tool_call(self, handler: ToolCallHandler) -> Unsubscribe:
        self.tool_handlers.append(handler)
        return lambda: self.tool_handlers.remove(handler)

    def on_state_change(self, handler: StateHandler) -> Unsubscribe:
        self.state_handlers.append(handler)
        return lambda: self.state_handlers.remove(handler)

    def set_state(self, state: SessionState) -> None:
        self.state = state
        for handler in list(self.state_handlers):
            handler(state)

    def emit_tool_calls(self, *calls: ToolCall) -> list:
        return [handler(list(calls)) for handler in list(self.tool_handlers)]


class FakeAdapter:
    def __init__(self, timeline: list[tuple[str, ...]]) -> None:
        self.timeline = timeline
        self.elements: list[FakeElement] = []

    def add(self, affordance: Affordance, label: str | None = None, *, disabled: bool = False) -> FakeElement:
        element = FakeElement(affordance=affordance, label=label, disabled=disabled)
        self.elements.append(element)
        return element

    def remove(self, affordance: Affordance) -> None:
        self.elements = [element for element in self.elements if element.affordance is not affordance]

    def clicked(self) -> list[FakeElement]:
        return [element for element in self.elements if element.clicks]

    async def query(self, affordance: Affordance, label: str | None = None) -> list[FakeElement]:
        return [
            element
            for element in self.elements
            if element.affordance is affordance and (label is None or element.label == label)
        ]

    async def is_disabled(self, handle: FakeElement) -> bool:
        return handle.disabled

    async def click(self, handle: FakeElement) -> None:
        handle.clicks += 1
        self.timeline.append(("click", str(handle.affordance), handle.label or ""))

    async def fill(self, handle: FakeElement, value: str) -> None:
        handle.value = value
        self.timeline.append(("fill", str(handle.affordance), value))


class FakeNavigator:
    def __init__(self, events: AppEvents, timeline: list[tuple[str, ...]]) -> None:
        self.events = events
        self.timeline = timeline
        self.routes: list[str] = []

    async def navigate(self, route: str) -> None:
        self.routes.append(route)
        self.timeline.append(("navigate", route))
        self.events.publish_location(LocationChangedEvent(path=route))


@pytest.fixture
def timeline() -> list[tuple[str, ...]]:
    return []


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        api_key="test-key",
        poll_interval_seconds=0.01,
        settle_delay_seconds=0,
    )


@pytest.fixture
def events() -> AppEvents:
    return AppEvents()


@pytest.fixture
def session(timeline: list[tuple[str, ...]]) -> FakeSession:
    return FakeSession(timeline)


@pytest.fixture
def adapter(timeline: list[tuple[str, ...]]) -> FakeAdapter:
    return FakeAdapter(timeline)


@pytest.fixture
def navigator(events: AppEvents, timeline: list[tuple[str, ...]]) -> FakeNavigator:
    return FakeNavigator(events, timeline)


@pytest.fixture
def assistant(
    session: FakeSession,
    adapter: FakeAdapter,
    navigator: FakeNavigator,
    events: AppEvents,
    settings: Settings,
):
    nav = NavAssistant(session, adapter, navigator, events, settings=settings)
    nav.mount()
    yield nav
    nav.unmount()


@pytest.fixture
def connected(assistant: NavAssistant, session: FakeSession) -> NavAssistant:
    session.set_state(SessionState.CONNECTED)
    session.sent.clear()
    session.timeline.clear()
    return assistant
