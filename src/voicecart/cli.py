"""voicecart command line."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from loguru import logger

from voicecart.actions import build_action_registry
from voicecart.assistant import NavAssistant
from voicecart.config import Settings, load_settings
from voicecart.errors import VoiceCartError
from voicecart.events import AppEvents
from voicecart.logging_utils import configure_logging

app = typer.Typer(name="voicecart", help="Voice shopping assistant for the storefront.", add_completion=False)


@app.command("schema")
def schema() -> None:
    """Print the function declarations sent to the live model."""
    declaration = build_action_registry().declare()
    typer.echo(json.dumps(declaration.function_declarations(), indent=2))


@app.command("instruction")
def instruction() -> None:
    """Print the system instruction."""
    typer.echo(build_action_registry().declare().system_instruction)


@app.command("run")
def run(
    url: str | None = typer.Option(None, "--url", help="Storefront base URL"),
    model: str | None = typer.Option(None, "--model", help="Live model name"),
    headless: bool | None = typer.Option(None, "--headless/--headed", help="Run the browser without a window"),
    workspace: Path | None = typer.Option(None, "--workspace", "-w", help="Directory holding the .env file"),
) -> None:
    """Open the storefront and run the assistant until interrupted."""
    settings = load_settings(
        workspace.resolve() if workspace else None,
        storefront_url=url,
        model=model,
        headless=headless,
    )
    configure_logging(profile="console", level=settings.log_level)
    try:
        asyncio.run(_serve(settings))
    except KeyboardInterrupt:
        logger.info("voicecart.interrupted")
    except VoiceCartError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1) from exc


async def _serve(settings: Settings) -> None:
    # Imported here so schema/instruction work without the browser and model stacks.
    from voicecart.session.gemini import GeminiLiveSession
    from voicecart.ui.browser import StorefrontBrowser

    settings.require_api_key()
    events = AppEvents()
    session = GeminiLiveSession(settings)
    async with StorefrontBrowser(settings, events) as browser:
        if browser.adapter is None or browser.navigator is None:
            raise VoiceCartError("storefront browser did not open a page")
        async with NavAssistant(session, browser.adapter, browser.navigator, events, settings=settings):
            await session.connect()
            try:
                await asyncio.Event().wait()
            finally:
                await session.disconnect()


if __name__ == "__main__":
    app()
