"""Rewards negotiation and login-wait state machine."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import StrEnum

from loguru import logger

from voicecart.events import ItemAddedToCartEvent, RewardsPromptEvent
from voicecart.prompts import (
    ADDED_CONTINUE_SHOPPING,
    ASK_REWARDS_MEMBER,
    DECLINED_REWARDS,
    PERSONALIZED_PITCH,
    WAIT_FOR_SIGN_IN,
)
from voicecart.routes import RouteContext
from voicecart.session.bridge import SessionBridge
from voicecart.ui.affordances import Affordance
from voicecart.ui.locator import AffordanceLocator

DEFAULT_POLL_INTERVAL_SECONDS = 1.0


class PendingFlow(StrEnum):
    NONE = "none"
    AWAITING_REWARDS_ANSWER = "awaitingRewardsAnswer"
    AWAITING_LOGIN_COMPLETION = "awaitingLoginCompletion"


@dataclass
class FlowState:
    """Pending flow plus the per-mount guards that keep transitions idempotent."""

    pending: PendingFlow = PendingFlow.NONE
    rewards_asked: bool = False
    post_login_shown: bool = False

    @property
    def awaiting_login(self) -> bool:
        return self.pending is PendingFlow.AWAITING_LOGIN_COMPLETION


class CrossFlowStateMachine:
    """Coordinate the rewards prompt and the sign-in wait against the live session.

    Sign-in happens in a popup this process cannot observe, so completion is
    detected by polling the page: the poll runs only while awaiting login and
    is cancelled on :meth:`close`.
    """

    def __init__(
        self,
        bridge: SessionBridge,
        locator: AffordanceLocator,
        routes: RouteContext,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        self.bridge = bridge
        self.locator = locator
        self.routes = routes
        self.poll_interval = poll_interval
        self.state = FlowState()
        self._poll_task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> PendingFlow:
        return self.state.pending

    def on_rewards_prompt(self, event: RewardsPromptEvent) -> None:
        if not self.bridge.connected or self.state.awaiting_login or self.state.rewards_asked:
            logger.debug(
                "flow.rewards_prompt.ignored kind={} connected={} pending={} asked={}",
                event.kind,
                self.bridge.connected,
                self.state.pending,
                self.state.rewards_asked,
            )
            return
        logger.info("flow.rewards_prompt.ask kind={}", event.kind)
        self.state.rewards_asked = True
        self.state.pending = PendingFlow.AWAITING_REWARDS_ANSWER
        self.bridge.send(ASK_REWARDS_MEMBER)

    async def respond_to_rewards_prompt(self, is_rewards_member: bool) -> None:
        logger.info(
            "flow.rewards_answer member={} pending={} product={}",
            is_rewards_member,
            self.state.pending,
            self.routes.current_product or "-",
        )
        await self.bridge.ensure_connected()
        if is_rewards_member:
            if self.state.awaiting_login:
                return
            self.state.pending = PendingFlow.AWAITING_LOGIN_COMPLETION
            self.bridge.send(WAIT_FOR_SIGN_IN)
            self._start_poll()
            await self._activate(Affordance.REWARDS_YES_BUTTON)
            return

        self.bridge.send(DECLINED_REWARDS)
        self._reset_pending()
        await self._activate(Affordance.REWARDS_NO_BUTTON)

    def on_item_added(self, event: ItemAddedToCartEvent) -> None:
        if not self.bridge.connected or self.state.awaiting_login:
            logger.info(
                "flow.item_added.suppressed connected={} pending={}", self.bridge.connected, self.state.pending
            )
            return
        if event.is_authenticated:
            self.bridge.send(PERSONALIZED_PITCH)
        else:
            self.bridge.send(ADDED_CONTINUE_SHOPPING)

    def on_disconnect(self) -> None:
        if self.state.pending is not PendingFlow.NONE:
            logger.info("flow.disconnect.reset pending={}", self.state.pending)
        self._reset_pending()

    async def check_login(self) -> bool:
        """Run one poll tick; return True when it completed the login wait."""
        if not self.state.awaiting_login or self.state.post_login_shown:
            return False
        if not self.routes.on_product_page:
            return False
        if not await self.locator.is_present(Affordance.LOGGED_IN_MARKER):
            return False
        logger.info("flow.login.completed path={}", self.routes.path)
        self.state.pending = PendingFlow.NONE
        self.state.post_login_shown = True
        return True

    def reset(self) -> None:
        """Start a fresh mount: clear the pending flow and the per-mount guards."""
        self._stop_poll()
        self.state = FlowState()

    def close(self) -> None:
        self._stop_poll()

    @property
    def polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def _reset_pending(self) -> None:
        self.state.pending = PendingFlow.NONE
        self._stop_poll()

    async def _activate(self, affordance: Affordance) -> None:
        result = await self.locator.activate(affordance)
        logger.info("flow.activate affordance={} result={}", affordance, result)

    def _start_poll(self) -> None:
        if self.polling:
            return
        self._poll_task = asyncio.create_task(self._poll_loop())

    def _stop_poll(self) -> None:
        task, self._poll_task = self._poll_task, None
        if task is not None:
            task.cancel()

    async def _poll_loop(self) -> None:
        try:
            while self.state.awaiting_login:
                await asyncio.sleep(self.poll_interval)
                if await self.check_login():
                    return
        except asyncio.CancelledError:
            return
        except Exception:
            logger.exception("flow.login_poll.error")
