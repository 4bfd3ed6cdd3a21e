"""Playwright-backed storefront adapter."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from playwright.async_api import Browser, Frame, Locator, Page, Playwright, async_playwright

from voicecart.config import Settings
from voicecart.events import CUSTOM_EVENT_NAMES, AppEvents, LocationChangedEvent
from voicecart.ui.affordances import Affordance

SELECTORS: dict[Affordance, str] = {
    Affordance.FIT_OPTION: ".fit-option",
    Affordance.SIZE_OPTION: ".size-option",
    Affordance.INSEAM_OPTION: ".size-option",
    Affordance.SHIPPING_OPTION: ".shipping-option",
    Affordance.FULL_NAME_FIELD: 'input[placeholder="Full Name"]',
    Affordance.STREET_FIELD: 'input[placeholder="Street Address"]',
    Affordance.APT_FIELD: 'input[placeholder="Apt #"]',
    Affordance.CITY_FIELD: 'input[placeholder="Town/City"]',
    Affordance.ZIP_CODE_FIELD: 'input[placeholder="Zip Code"]',
    Affordance.PHONE_FIELD: "#phone",
    Affordance.CODE_FIELD: "#code",
    Affordance.CONTINUE_BUTTON: ".continue-btn",
    Affordance.SEND_CODE_BUTTON: ".phone-input-row button",
    Affordance.VERIFY_BUTTON: ".verification-code-row button",
    Affordance.SEND_PAYMENT_LINK_BUTTON: ".send-link-btn",
    Affordance.WALLET_PAY_BUTTON: ".wallet-pay-btn",
    Affordance.REWARDS_UNLOCK_BUTTON: ".rewards-unlock-btn",
    Affordance.REWARDS_YES_BUTTON: ".rewards-prompt button:first-child",
    Affordance.REWARDS_NO_BUTTON: ".rewards-prompt button:last-child",
    Affordance.ADD_TO_BAG_BUTTON: ".add-to-bag",
    Affordance.SELECTED_SIZE_MARKER: ".size-option.selected",
    Affordance.LOGGED_IN_MARKER: ".user-logged-in",
}

# Shipping options render their label in a child element.
LABEL_SELECTORS: dict[Affordance, str] = {
    Affordance.SHIPPING_OPTION: ".method",
}

BINDING_NAME = "__voicecartEmit"
DEFAULT_ACTION_TIMEOUT_MS = 5000

_LISTENER_SCRIPT = """
(() => {
  if (window.__voicecartListening) return;
  window.__voicecartListening = true;
  for (const name of %s) {
    document.addEventListener(name, (event) => {
      window.%s(name, event.detail ?? null);
    });
  }
})();
"""

_NAVIGATE_SCRIPT = """
(route) => {
  window.history.pushState({}, '', route);
  window.dispatchEvent(new PopStateEvent('popstate', { state: {} }));
}
"""


class PlaywrightAdapter:
    """Affordance adapter over one Playwright page."""

    def __init__(self, page: Page, *, action_timeout_ms: float = DEFAULT_ACTION_TIMEOUT_MS) -> None:
        self.page = page
        self.action_timeout_ms = action_timeout_ms

    async def query(self, affordance: Affordance, label: str | None = None) -> list[Locator]:
        selector = SELECTORS.get(affordance)
        if selector is None:
            return []
        candidates = self.page.locator(selector)
        count = await candidates.count()
        matches: list[Locator] = []
        for index in range(count):
            element = candidates.nth(index)
            if label is None or await self._label_of(affordance, element) == label:
                matches.append(element)
        return matches

    async def is_disabled(self, handle: Locator) -> bool:
        return await handle.is_disabled()

    async def click(self, handle: Locator) -> None:
        await handle.click(timeout=self.action_timeout_ms)

    async def fill(self, handle: Locator, value: str) -> None:
        # fill() emits input events; the explicit change event keeps controlled inputs in sync.
        await handle.fill(value, timeout=self.action_timeout_ms)
        await handle.dispatch_event("change")

    async def _label_of(self, affordance: Affordance, element: Locator) -> str:
        label_selector = LABEL_SELECTORS.get(affordance)
        target = element.locator(label_selector).first if label_selector else element
        if label_selector and await target.count() == 0:
            return ""
        text = await target.text_content()
        return (text or "").strip()


class PlaywrightNavigator:
    """In-app navigation through the history API, publishing location changes."""

    def __init__(self, page: Page, events: AppEvents) -> None:
        self.page = page
        self.events = events
        self.page.on("framenavigated", self._on_frame_navigated)

    async def navigate(self, route: str) -> None:
        logger.info("navigator.navigate route={}", route)
        await self.page.evaluate(_NAVIGATE_SCRIPT, route)
        self.events.publish_location(LocationChangedEvent(path=route))

    def _on_frame_navigated(self, frame: Frame) -> None:
        if frame is not self.page.main_frame:
            return
        self.events.publish_location(LocationChangedEvent(path=frame.url))


class PlaywrightEventBridge:
    """Forward the storefront's DOM custom events into :class:`AppEvents`."""

    def __init__(self, page: Page, events: AppEvents) -> None:
        self.page = page
        self.events = events

    @staticmethod
    def listener_script() -> str:
        return _LISTENER_SCRIPT % (json.dumps(list(CUSTOM_EVENT_NAMES)), BINDING_NAME)

    async def install(self) -> None:
        await self.page.expose_function(BINDING_NAME, self._on_custom_event)
        await self.page.add_init_script(self.listener_script())

    def _on_custom_event(self, name: str, detail: Any = None) -> None:
        logger.info("events.dom name={} detail={}", name, detail)
        self.events.publish_raw(name, detail if isinstance(detail, dict) else None)


class StorefrontBrowser:
    """Launch a browser on the storefront and expose adapter, navigator and event bridge."""

    def __init__(self, settings: Settings, events: AppEvents) -> None:
        self.settings = settings
        self.events = events
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self.page: Page | None = None
        self.adapter: PlaywrightAdapter | None = None
        self.navigator: PlaywrightNavigator | None = None

    async def __aenter__(self) -> StorefrontBrowser:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.settings.headless)
        self.page = await self._browser.new_page()
        await PlaywrightEventBridge(self.page, self.events).install()
        self.adapter = PlaywrightAdapter(self.page)
        self.navigator = PlaywrightNavigator(self.page, self.events)
        logger.info("browser.open url={}", self.settings.storefront_url)
        await self.page.goto(self.settings.storefront_url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        logger.info("browser.closed")
