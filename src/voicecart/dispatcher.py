"""Tool-call dispatcher: routes live model actions to the storefront."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from loguru import logger

from voicecart import prompts
from voicecart.actions import models
from voicecart.actions.registry import ActionRegistry
from voicecart.errors import ActionParityError
from voicecart.flows import CrossFlowStateMachine
from voicecart.session.bridge import SessionBridge
from voicecart.types import ActivationResult, ToolCall
from voicecart.ui.affordances import SHIPPING_FIELDS, Affordance, Navigator
from voicecart.ui.locator import AffordanceLocator

ActionHandler = Callable[[Any], Awaitable[None]]

SINGLE_SIZE_PRODUCT = "gap-logo-tote"
PERSONALIZED_ROUTE = "/personalized"
REDACTED_ARGUMENTS = frozenset({"phoneNumber", "code"})

_CLICK_ACTIONS: dict[str, Affordance] = {
    "clickContinue": Affordance.CONTINUE_BUTTON,
    "clickSendCode": Affordance.SEND_CODE_BUTTON,
    "clickVerify": Affordance.VERIFY_BUTTON,
    "sendPaymentLink": Affordance.SEND_PAYMENT_LINK_BUTTON,
    "completePayment": Affordance.WALLET_PAY_BUTTON,
}


def loggable_arguments(args: models.ActionInput) -> dict[str, Any]:
    """Return the wire arguments with personal values masked."""
    return {
        key: "***" if key in REDACTED_ARGUMENTS else value for key, value in args.model_dump(by_alias=True).items()
    }


class ToolCallDispatcher:
    """Map validated tool calls to UI activations, navigation and flow transitions.

    Results are never returned to the caller; they surface as scripted
    utterances sent through the session bridge. Calls whose control is missing
    from the page are logged and skipped without telling the user.
    """

    def __init__(
        self,
        registry: ActionRegistry,
        bridge: SessionBridge,
        locator: AffordanceLocator,
        navigator: Navigator,
        flows: CrossFlowStateMachine,
    ) -> None:
        self.registry = registry
        self.bridge = bridge
        self.locator = locator
        self.navigator = navigator
        self.flows = flows
        self._batches: set[asyncio.Task[None]] = set()
        self._routes: dict[str, ActionHandler] = {
            "navigate": self._navigate,
            "addToCart": self._add_to_cart,
            "selectFit": self._select_fit,
            "selectSize": self._select_size,
            "selectInseam": self._select_inseam,
            "setFullName": self._set_full_name,
            "setShippingField": self._set_shipping_field,
            "selectShippingMethod": self._select_shipping_method,
            "setPhoneNumber": self._set_phone_number,
            "setVerificationCode": self._set_verification_code,
            "checkRewardsStatus": self._check_rewards_status,
            "showPersonalizedItems": self._show_personalized_items,
            "respondToRewardsPrompt": self._respond_to_rewards_prompt,
        }
        for name, affordance in _CLICK_ACTIONS.items():
            self._routes[name] = self._click_handler(name, affordance)
        self._check_parity()

    def handled_actions(self) -> list[str]:
        return list(self._routes)

    def handle_batch(self, calls: Sequence[ToolCall]) -> asyncio.Task[None]:
        """Fire-and-forget entry point registered on the live session."""
        task = asyncio.create_task(self.dispatch_batch(list(calls)))
        self._batches.add(task)
        task.add_done_callback(self._batches.discard)
        return task

    async def dispatch_batch(self, calls: Sequence[ToolCall]) -> None:
        for call in calls:
            await self.dispatch(call)

    async def dispatch(self, call: ToolCall) -> bool:
        """Handle one call; return False when it was dropped as out of schema."""
        args = self.registry.parse(call)
        handler = self._routes.get(call.name)
        if args is None or handler is None:
            logger.info("dispatch.drop name={}", call.name)
            return False

        logger.info("dispatch.call.start name={} args={}", call.name, loggable_arguments(args))
        start = time.monotonic()
        try:
            await handler(args)
        except Exception:
            logger.exception("dispatch.call.error name={}", call.name)
        finally:
            duration = time.monotonic() - start
            logger.info("dispatch.call.end name={} duration={:.3f}ms", call.name, duration * 1000)
        return True

    def close(self) -> None:
        for task in list(self._batches):
            task.cancel()
        self._batches.clear()

    def _check_parity(self) -> None:
        declared = set(self.registry.names())
        handled = set(self._routes)
        if declared != handled:
            raise ActionParityError(undeclared=handled - declared, unhandled=declared - handled)

    def _skip(self, action: str, affordance: Affordance, result: ActivationResult) -> None:
        logger.info("dispatch.skip action={} affordance={} result={}", action, affordance, result)

    async def _activate(
        self,
        action: str,
        affordance: Affordance,
        *,
        label: str | None = None,
        value: str | None = None,
    ) -> bool:
        result = await self.locator.activate(affordance, label=label, value=value)
        if result is not ActivationResult.OK:
            self._skip(action, affordance, result)
            return False
        return True

    async def _navigate(self, args: models.NavigateInput) -> None:
        confirmation = prompts.ROUTE_CONFIRMATIONS.get(args.route, prompts.GENERIC_ROUTE_CONFIRMATION)
        self.bridge.send(confirmation)
        await self.navigator.navigate(args.route)

    async def _add_to_cart(self, args: models.AddToCartInput) -> None:
        if args.product_id == SINGLE_SIZE_PRODUCT:
            if await self._activate("addToCart", Affordance.ADD_TO_BAG_BUTTON):
                self.bridge.send(prompts.TOTE_ADDED)
            return

        # Size gating is a business rule, checked here before the button's own disabled state.
        if not await self.locator.is_present(Affordance.SELECTED_SIZE_MARKER):
            self.bridge.send(prompts.SELECT_SIZE_FIRST)
            return

        result = await self.locator.activate(Affordance.ADD_TO_BAG_BUTTON)
        if result is ActivationResult.DISABLED:
            self.bridge.send(prompts.ADD_TO_CART_BLOCKED)
        elif result is ActivationResult.NOT_FOUND:
            self._skip("addToCart", Affordance.ADD_TO_BAG_BUTTON, result)

    async def _select_fit(self, args: models.SelectFitInput) -> None:
        await self._activate("selectFit", Affordance.FIT_OPTION, label=args.fit)

    async def _select_size(self, args: models.SelectSizeInput) -> None:
        await self._activate("selectSize", Affordance.SIZE_OPTION, label=args.size)

    async def _select_inseam(self, args: models.SelectInseamInput) -> None:
        await self._activate("selectInseam", Affordance.INSEAM_OPTION, label=args.inseam)

    async def _select_shipping_method(self, args: models.SelectShippingMethodInput) -> None:
        await self._activate("selectShippingMethod", Affordance.SHIPPING_OPTION, label=args.method)

    async def _set_full_name(self, args: models.SetFullNameInput) -> None:
        await self._activate("setFullName", Affordance.FULL_NAME_FIELD, value=args.name)

    async def _set_shipping_field(self, args: models.SetShippingFieldInput) -> None:
        await self._activate("setShippingField", SHIPPING_FIELDS[args.field], value=args.value)

    async def _set_phone_number(self, args: models.SetPhoneNumberInput) -> None:
        if await self._activate("setPhoneNumber", Affordance.PHONE_FIELD, value=args.phone_number):
            self.locator.activate_after(Affordance.SEND_CODE_BUTTON)

    async def _set_verification_code(self, args: models.SetVerificationCodeInput) -> None:
        if await self._activate("setVerificationCode", Affordance.CODE_FIELD, value=args.code):
            self.locator.activate_after(Affordance.VERIFY_BUTTON)

    def _click_handler(self, action: str, affordance: Affordance) -> ActionHandler:
        async def _handler(_args: models.ActionInput) -> None:
            await self._activate(action, affordance)

        return _handler

    async def _check_rewards_status(self, _args: models.CheckInput) -> None:
        if not await self.locator.is_present(Affordance.REWARDS_UNLOCK_BUTTON):
            self._skip("checkRewardsStatus", Affordance.REWARDS_UNLOCK_BUTTON, ActivationResult.NOT_FOUND)
            return
        self.bridge.send(prompts.WAIT_FOR_SIGN_IN)
        await self._activate("checkRewardsStatus", Affordance.REWARDS_UNLOCK_BUTTON)

    async def _show_personalized_items(self, args: models.ShowPersonalizedItemsInput) -> None:
        logger.info("dispatch.personalized category={}", args.category)
        await self.navigator.navigate(PERSONALIZED_ROUTE)

    async def _respond_to_rewards_prompt(self, args: models.RespondToRewardsPromptInput) -> None:
        await self.flows.respond_to_rewards_prompt(args.is_rewards_member)
