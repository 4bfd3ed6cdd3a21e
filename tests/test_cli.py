from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from voicecart import cli
from voicecart.prompts import SYSTEM_INSTRUCTION


def test_schema_prints_function_declarations() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["schema"])
    assert result.exit_code == 0
    declarations = json.loads(result.stdout)
    assert declarations[0]["name"] == "navigate"
    assert {item["name"] for item in declarations} >= {"addToCart", "selectInseam", "respondToRewardsPrompt"}


def test_instruction_prints_system_instruction() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["instruction"])
    assert result.exit_code == 0
    assert result.stdout.strip() == SYSTEM_INSTRUCTION.strip()


def test_run_passes_overrides_to_serve(monkeypatch, tmp_path: Path) -> None:
    seen = {}

    async def _fake_serve(settings) -> None:
        seen["settings"] = settings

    monkeypatch.setattr(cli, "_serve", _fake_serve)
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)

    runner = CliRunner()
    result = runner.invoke(
        cli.app, ["run", "--url", "http://shop.test", "--headless", "--workspace", str(tmp_path)]
    )

    assert result.exit_code == 0
    assert seen["settings"].storefront_url == "http://shop.test"
    assert seen["settings"].headless is True


def test_run_reports_missing_api_key(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("VOICECART_API_KEY", raising=False)
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)

    runner = CliRunner()
    result = runner.invoke(cli.app, ["run", "--workspace", str(tmp_path)])

    assert result.exit_code == 1
    assert "VOICECART_API_KEY" in result.output


def test_run_fails_cleanly_when_browser_has_no_page(monkeypatch, tmp_path: Path) -> None:
    class _PagelessBrowser:
        adapter = None
        navigator = None

        def __init__(self, settings, events) -> None:
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb) -> None:
            return None

    monkeypatch.setenv("VOICECART_API_KEY", "test-key")
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)
    monkeypatch.setattr("voicecart.ui.browser.StorefrontBrowser", _PagelessBrowser)

    runner = CliRunner()
    result = runner.invoke(cli.app, ["run", "--workspace", str(tmp_path)])

    assert result.exit_code == 1
    assert "did not open a page" in result.output
