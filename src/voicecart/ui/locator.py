"""Resolve logical affordances and activate them."""

from __future__ import annotations

import asyncio
import time

from loguru import logger

from voicecart.types import ActivationResult
from voicecart.ui.affordances import Affordance, AffordanceAdapter, Handle, label_allowed

DEFAULT_SETTLE_DELAY_SECONDS = 0.1


class AffordanceLocator:
    """Stateless lookup and activation over an :class:`AffordanceAdapter`.

    Lookups are never cached; the page can re-render between two tool calls.
    Only the follow-up tasks scheduled by :meth:`activate_after` are tracked so
    they can be cancelled on teardown.
    """

    def __init__(self, adapter: AffordanceAdapter, *, settle_delay: float = DEFAULT_SETTLE_DELAY_SECONDS) -> None:
        self.adapter = adapter
        self.settle_delay = settle_delay
        self._followups: set[asyncio.Task[ActivationResult]] = set()

    async def resolve(self, affordance: Affordance, label: str | None = None) -> Handle | None:
        """Return the first matching element, preferring an enabled one."""
        if not label_allowed(affordance, label):
            logger.debug("ui.resolve.rejected affordance={} label={}", affordance, label)
            return None
        handles = await self.adapter.query(affordance, label)
        if not handles:
            return None
        for handle in handles:
            if not await self.adapter.is_disabled(handle):
                return handle
        return handles[0]

    async def is_present(self, affordance: Affordance) -> bool:
        return bool(await self.adapter.query(affordance, None))

    async def activate(
        self,
        affordance: Affordance,
        *,
        label: str | None = None,
        value: str | None = None,
    ) -> ActivationResult:
        """Click the affordance, or set its value when ``value`` is given."""
        logger.info("ui.activate.start affordance={} label={} fill={}", affordance, label or "-", value is not None)
        start = time.monotonic()
        result = ActivationResult.NOT_FOUND
        try:
            handle = await self.resolve(affordance, label)
            if handle is None:
                return result
            if await self.adapter.is_disabled(handle):
                result = ActivationResult.DISABLED
                return result
            if value is None:
                await self.adapter.click(handle)
            else:
                await self.adapter.fill(handle, value)
            result = ActivationResult.OK
            return result
        finally:
            duration = time.monotonic() - start
            logger.info(
                "ui.activate.end affordance={} result={} duration={:.3f}ms", affordance, result, duration * 1000
            )

    def activate_after(self, affordance: Affordance, delay: float | None = None) -> asyncio.Task[ActivationResult]:
        """Activate a dependent control once the preceding value change has settled."""
        task = asyncio.create_task(self._activate_later(affordance, self.settle_delay if delay is None else delay))
        self._followups.add(task)
        task.add_done_callback(self._followups.discard)
        return task

    async def _activate_later(self, affordance: Affordance, delay: float) -> ActivationResult:
        await asyncio.sleep(delay)
        try:
            return await self.activate(affordance)
        except Exception:
            logger.exception("ui.followup.error affordance={}", affordance)
            return ActivationResult.NOT_FOUND

    @property
    def pending_followups(self) -> int:
        return len(self._followups)

    def cancel_pending(self) -> None:
        for task in list(self._followups):
            task.cancel()
        self._followups.clear()
