"""UI affordance access."""

from .affordances import SHIPPING_FIELDS, Affordance, AffordanceAdapter, Navigator, label_allowed
from .locator import AffordanceLocator

__all__ = [
    "SHIPPING_FIELDS",
    "Affordance",
    "AffordanceAdapter",
    "AffordanceLocator",
    "Navigator",
    "label_allowed",
]
