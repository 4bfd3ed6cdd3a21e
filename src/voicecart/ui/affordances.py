"""Logical affordance names and the capability interfaces behind them."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Protocol, TypeAlias, get_args

from voicecart.actions.models import Fit, Inseam, ShippingMethod, Size

Handle: TypeAlias = Any


class Affordance(StrEnum):
    FIT_OPTION = "fit-option"
    SIZE_OPTION = "size-option"
    INSEAM_OPTION = "inseam-option"
    SHIPPING_OPTION = "shipping-option"
    FULL_NAME_FIELD = "field:fullName"
    STREET_FIELD = "field:street"
    APT_FIELD = "field:apt"
    CITY_FIELD = "field:city"
    ZIP_CODE_FIELD = "field:zipCode"
    PHONE_FIELD = "field:phone"
    CODE_FIELD = "field:code"
    CONTINUE_BUTTON = "continue"
    SEND_CODE_BUTTON = "send-code"
    VERIFY_BUTTON = "verify"
    SEND_PAYMENT_LINK_BUTTON = "send-payment-link"
    WALLET_PAY_BUTTON = "wallet-pay"
    REWARDS_UNLOCK_BUTTON = "rewards-unlock"
    REWARDS_YES_BUTTON = "rewards-yes"
    REWARDS_NO_BUTTON = "rewards-no"
    ADD_TO_BAG_BUTTON = "add-to-bag"
    SELECTED_SIZE_MARKER = "selected-size"
    LOGGED_IN_MARKER = "logged-in"


# Labels a choice affordance may be matched against; anything else is never looked up.
LABEL_ALLOW_LISTS: dict[Affordance, frozenset[str]] = {
    Affordance.FIT_OPTION: frozenset(get_args(Fit)),
    Affordance.SIZE_OPTION: frozenset(get_args(Size)),
    Affordance.INSEAM_OPTION: frozenset(get_args(Inseam)),
    Affordance.SHIPPING_OPTION: frozenset(get_args(ShippingMethod)),
}

SHIPPING_FIELDS: dict[str, Affordance] = {
    "fullName": Affordance.FULL_NAME_FIELD,
    "street": Affordance.STREET_FIELD,
    "apt": Affordance.APT_FIELD,
    "city": Affordance.CITY_FIELD,
    "zipCode": Affordance.ZIP_CODE_FIELD,
}


def label_allowed(affordance: Affordance, label: str | None) -> bool:
    allowed = LABEL_ALLOW_LISTS.get(affordance)
    if allowed is None:
        return label is None
    return label in allowed


class AffordanceAdapter(Protocol):
    """Page-side capability used by the locator; knows the concrete selectors."""

    async def query(self, affordance: Affordance, label: str | None = None) -> list[Handle]: ...

    async def is_disabled(self, handle: Handle) -> bool: ...

    async def click(self, handle: Handle) -> None: ...

    async def fill(self, handle: Handle, value: str) -> None: ...


class Navigator(Protocol):
    async def navigate(self, route: str) -> None: ...
