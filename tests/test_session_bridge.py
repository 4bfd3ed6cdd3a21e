from __future__ import annotations

import pytest

from voicecart import prompts
from voicecart.actions import build_action_registry
from voicecart.session.bridge import SessionBridge
from voicecart.types import SessionState


def test_configure_sets_model_tools_and_voice(session, settings) -> None:
    bridge = SessionBridge(session, settings)
    declaration = build_action_registry().declare()

    config = bridge.configure(declaration)

    assert session.config == config
    assert config.model == settings.model
    assert config.system_instruction == prompts.SYSTEM_INSTRUCTION
    assert config.generation_config.voice_name == "Aoede"
    assert config.generation_config.response_modality == "AUDIO"
    assert config.tools == declaration.tools()


def test_greets_once_per_mount_across_reconnects(session, settings) -> None:
    bridge = SessionBridge(session, settings)
    bridge.mount()

    session.set_state(SessionState.CONNECTING)
    session.set_state(SessionState.CONNECTED)
    session.set_state(SessionState.DISCONNECTED)
    session.set_state(SessionState.CONNECTED)

    assert session.sent == [prompts.GREETING]
    assert bridge.has_greeted is True


def test_mount_on_live_session_greets_immediately(session, settings) -> None:
    session.state = SessionState.CONNECTED
    bridge = SessionBridge(session, settings)

    bridge.mount()
    bridge.mount()

    assert session.sent == [prompts.GREETING]
    assert len(session.state_handlers) == 1


def test_remount_greets_again(session, settings) -> None:
    bridge = SessionBridge(session, settings)
    bridge.mount()
    session.set_state(SessionState.CONNECTED)
    bridge.unmount()
    assert session.state_handlers == []

    bridge.mount()
    assert session.sent == [prompts.GREETING, prompts.GREETING]


def test_disconnect_handlers_run_on_disconnect(session, settings) -> None:
    bridge = SessionBridge(session, settings)
    bridge.mount()
    calls: list[str] = []
    unsubscribe = bridge.on_disconnect(lambda: calls.append("first"))
    bridge.on_disconnect(lambda: calls.append("second"))

    session.set_state(SessionState.DISCONNECTED)
    unsubscribe()
    session.set_state(SessionState.CONNECTED)
    session.set_state(SessionState.DISCONNECTED)

    assert calls == ["first", "second", "second"]


@pytest.mark.asyncio
async def test_ensure_connected_connects_only_when_needed(session, settings) -> None:
    bridge = SessionBridge(session, settings)

    await bridge.ensure_connected()
    await bridge.ensure_connected()

    assert session.connect_calls == 1
    assert bridge.connected is True


def test_send_wraps_text_part(session, settings) -> None:
    bridge = SessionBridge(session, settings)
    bridge.send("hello")
    assert session.sent == ["hello"]
