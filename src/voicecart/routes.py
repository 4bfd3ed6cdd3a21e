"""Route context observer."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from loguru import logger

from voicecart.events import LocationChangedEvent

PRODUCT_ROUTES: dict[str, str] = {
    "/gap-logo-tote": "gap-logo-tote",
    "/baby-boot-jean": "baby-boot-jean",
}


def product_for_path(path: str) -> str:
    """Return the product shown at ``path`` or an empty string."""
    return PRODUCT_ROUTES.get(normalize_path(path), "")


def normalize_path(path: str) -> str:
    parts = urlsplit(path)
    return parts.path or "/"


@dataclass
class RouteContext:
    """Current location and the product it implies."""

    path: str = "/"
    current_product: str = ""

    def observe(self, path: str) -> None:
        self.path = normalize_path(path)
        self.current_product = product_for_path(self.path)
        logger.debug("route.observe path={} product={}", self.path, self.current_product or "-")

    def on_location(self, event: LocationChangedEvent) -> None:
        self.observe(event.path)

    @property
    def on_product_page(self) -> bool:
        return bool(self.current_product)
