from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from voicecart.errors import SessionNotConfiguredError
from voicecart.session.base import GenerationConfig, LiveConfig
from voicecart.session.gemini import GeminiLiveSession, build_connect_config, tool_calls_from_message
from voicecart.types import SessionState


class _FakeLive:
    def __init__(self, messages: list) -> None:
        self.messages = messages
        self.sent: list[dict] = []

    async def send_client_content(self, *, turns, turn_complete: bool) -> None:
        self.sent.append({"turns": turns, "turn_complete": turn_complete})

    async def receive(self):
        for message in self.messages:
            yield message
        self.messages = []
        await asyncio.sleep(3600)


class _FakeConnect:
    def __init__(self, live: _FakeLive) -> None:
        self.live = live
        self.kwargs: dict = {}

    def __call__(self, **kwargs):
        self.kwargs = kwargs
        return self

    async def __aenter__(self) -> _FakeLive:
        return self.live

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


def _fake_client(live: _FakeLive) -> SimpleNamespace:
    connect = _FakeConnect(live)
    return SimpleNamespace(aio=SimpleNamespace(live=SimpleNamespace(connect=connect)))


def _function_call_message(*calls: tuple[str, dict]) -> SimpleNamespace:
    function_calls = [
        SimpleNamespace(name=name, args=args, id=f"call-{index}") for index, (name, args) in enumerate(calls)
    ]
    return SimpleNamespace(tool_call=SimpleNamespace(function_calls=function_calls))


def _config() -> LiveConfig:
    return LiveConfig(
        model="models/test",
        tools=[{"function_declarations": [{"name": "navigate"}]}],
        system_instruction="be nice",
        generation_config=GenerationConfig(voice_name="Puck"),
    )


def test_build_connect_config() -> None:
    rendered = build_connect_config(_config())
    assert rendered["response_modalities"] == ["AUDIO"]
    assert rendered["speech_config"]["voice_config"]["prebuilt_voice_config"]["voice_name"] == "Puck"
    assert rendered["system_instruction"] == {"parts": [{"text": "be nice"}]}
    assert rendered["tools"] == [{"function_declarations": [{"name": "navigate"}]}]


def test_tool_calls_from_message() -> None:
    message = _function_call_message(("navigate", {"route": "/cart"}), ("clickVerify", None))
    calls = tool_calls_from_message(message)
    assert [call.name for call in calls] == ["navigate", "clickVerify"]
    assert calls[0].arguments == {"route": "/cart"}
    assert calls[1].arguments == {}
    assert calls[0].id == "call-0"

    assert tool_calls_from_message(SimpleNamespace(tool_call=None)) == []


@pytest.mark.asyncio
async def test_connect_requires_config(settings) -> None:
    session = GeminiLiveSession(settings, client=_fake_client(_FakeLive([])))
    with pytest.raises(SessionNotConfiguredError):
        await session.connect()


@pytest.mark.asyncio
async def test_session_round_trip(settings) -> None:
    live = _FakeLive([_function_call_message(("navigate", {"route": "/cart"}))])
    client = _fake_client(live)
    session = GeminiLiveSession(settings, client=client)
    session.set_config(_config())

    states: list[SessionState] = []
    batches: list[list[str]] = []
    session.on_state_change(states.append)
    session.on_tool_call(lambda calls: batches.append([call.name for call in calls]))

    session.send([{"text": "queued before connect"}])
    await session.connect()
    session.send([{"text": "hello"}])
    await asyncio.sleep(0.01)

    assert session.state is SessionState.CONNECTED
    assert client.aio.live.connect.kwargs["model"] == "models/test"
    assert batches == [["navigate"]]
    assert [item["turns"]["parts"] for item in live.sent] == [
        [{"text": "queued before connect"}],
        [{"text": "hello"}],
    ]

    await session.disconnect()
    assert session.state is SessionState.DISCONNECTED
    assert states == [SessionState.CONNECTING, SessionState.CONNECTED, SessionState.DISCONNECTED]
