from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from voicecart.config import DEFAULT_MODEL, Settings, load_settings
from voicecart.errors import ApiKeyNotConfiguredError, ConfigurationError


def test_defaults(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("VOICECART_API_KEY", raising=False)
    settings = load_settings(tmp_path)

    assert settings.model == DEFAULT_MODEL
    assert settings.api_version == "v1alpha"
    assert settings.voice_name == "Aoede"
    assert settings.poll_interval_seconds == 1.0
    assert settings.settle_delay_seconds == 0.1
    with pytest.raises(ApiKeyNotConfiguredError):
        settings.require_api_key()


def test_environment_and_workspace_env_file(monkeypatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("VOICECART_API_KEY=from-file\nVOICECART_VOICE_NAME=Puck\n")
    monkeypatch.delenv("VOICECART_API_KEY", raising=False)
    monkeypatch.setenv("VOICECART_STOREFRONT_URL", "http://shop.test")

    settings = load_settings(tmp_path)

    assert settings.require_api_key() == "from-file"
    assert settings.voice_name == "Puck"
    assert settings.storefront_url == "http://shop.test"


def test_overrides_win_and_none_is_ignored(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("VOICECART_STOREFRONT_URL", "http://shop.test")

    settings = load_settings(tmp_path, storefront_url="http://override.test", model=None)

    assert settings.storefront_url == "http://override.test"
    assert settings.model == DEFAULT_MODEL


def test_poll_interval_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, poll_interval_seconds=0)  # type: ignore[call-arg]


def test_api_key_error_is_configuration_error() -> None:
    assert issubclass(ApiKeyNotConfiguredError, ConfigurationError)
