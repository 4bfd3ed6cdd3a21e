"""Signal-based bus for storefront application events."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal

from blinker import Signal
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from voicecart.types import Unsubscribe

REWARDS_PROMPT_SHOW = "rewardsPromptShow"
REWARDS_PROMPT_FADE = "rewardsPromptFade"
ITEM_ADDED_TO_CART = "itemAddedToCart"
CUSTOM_EVENT_NAMES = (REWARDS_PROMPT_FADE, REWARDS_PROMPT_SHOW, ITEM_ADDED_TO_CART)


class RewardsPromptEvent(BaseModel):
    """The loyalty prompt appeared or finished its entrance animation."""

    kind: Literal["show", "fade"]


class ItemAddedToCartEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_authenticated: bool = Field(default=False, alias="isAuthenticated")


class LocationChangedEvent(BaseModel):
    path: str


RewardsPromptHandler = Callable[[RewardsPromptEvent], None]
ItemAddedHandler = Callable[[ItemAddedToCartEvent], None]
LocationHandler = Callable[[LocationChangedEvent], None]


class AppEvents:
    """In-process bus backed by blinker signals."""

    def __init__(self) -> None:
        self._rewards_prompt = Signal("voicecart.rewards_prompt")
        self._item_added = Signal("voicecart.item_added_to_cart")
        self._location = Signal("voicecart.location_changed")

    def publish_rewards_prompt(self, event: RewardsPromptEvent) -> None:
        self._rewards_prompt.send(self, event=event)

    def publish_item_added(self, event: ItemAddedToCartEvent) -> None:
        self._item_added.send(self, event=event)

    def publish_location(self, event: LocationChangedEvent) -> None:
        self._location.send(self, event=event)

    def publish_raw(self, name: str, detail: Mapping[str, Any] | None = None) -> bool:
        """Republish one DOM custom event; unknown names and bad payloads are dropped."""
        try:
            if name == REWARDS_PROMPT_SHOW:
                self.publish_rewards_prompt(RewardsPromptEvent(kind="show"))
            elif name == REWARDS_PROMPT_FADE:
                self.publish_rewards_prompt(RewardsPromptEvent(kind="fade"))
            elif name == ITEM_ADDED_TO_CART:
                self.publish_item_added(ItemAddedToCartEvent.model_validate(dict(detail or {})))
            else:
                logger.debug("events.raw.unknown name={}", name)
                return False
        except ValidationError:
            logger.warning("events.raw.invalid name={} detail={}", name, detail)
            return False
        return True

    def on_rewards_prompt(self, handler: RewardsPromptHandler) -> Unsubscribe:
        return _connect(self._rewards_prompt, handler)

    def on_item_added(self, handler: ItemAddedHandler) -> Unsubscribe:
        return _connect(self._item_added, handler)

    def on_location(self, handler: LocationHandler) -> Unsubscribe:
        return _connect(self._location, handler)


def _connect(signal: Signal, handler: Callable[[Any], None]) -> Unsubscribe:
    def _receiver(sender: Any, *, event: Any) -> None:
        handler(event)

    signal.connect(_receiver, weak=False)
    return lambda: signal.disconnect(_receiver)
