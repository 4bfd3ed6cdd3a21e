"""Catalog of storefront actions exposed to the live model."""

from __future__ import annotations

from voicecart.actions import models
from voicecart.actions.registry import ActionRegistry, ActionSpec
from voicecart.prompts import SYSTEM_INSTRUCTION


def build_action_registry(system_instruction: str = SYSTEM_INSTRUCTION) -> ActionRegistry:
    return ActionRegistry(_all_specs(), system_instruction=system_instruction)


def _all_specs() -> list[ActionSpec]:
    return [
        *_browse_specs(),
        *_product_specs(),
        *_checkout_specs(),
        *_rewards_specs(),
    ]


def _browse_specs() -> list[ActionSpec]:
    return [
        ActionSpec("navigate", "Navigate to a specific product page or section", models.NavigateInput),
        ActionSpec("showPersonalizedItems", "Show personalized recommendations", models.ShowPersonalizedItemsInput),
    ]


def _product_specs() -> list[ActionSpec]:
    return [
        ActionSpec("addToCart", "Add current product to shopping cart", models.AddToCartInput),
        ActionSpec("selectFit", "Select a fit option for the product", models.SelectFitInput),
        ActionSpec("selectSize", "Select a size option for the product", models.SelectSizeInput),
        ActionSpec("selectInseam", "Select an inseam length for the product", models.SelectInseamInput),
    ]


def _checkout_specs() -> list[ActionSpec]:
    return [
        ActionSpec("setFullName", "Set the full name in the shipping address form", models.SetFullNameInput),
        ActionSpec("setShippingField", "Set a field in the shipping address form", models.SetShippingFieldInput),
        ActionSpec("selectShippingMethod", "Select a shipping method option", models.SelectShippingMethodInput),
        ActionSpec("clickContinue", "Click the continue button in the shipping form", models.ClickInput),
        ActionSpec("setPhoneNumber", "Set the phone number in the quick pay form", models.SetPhoneNumberInput),
        ActionSpec("clickSendCode", "Click the send code button in the quick pay form", models.ClickInput),
        ActionSpec("setVerificationCode", "Set the verification code in the form", models.SetVerificationCodeInput),
        ActionSpec("clickVerify", "Click the verify button", models.ClickInput),
        ActionSpec("sendPaymentLink", "Click the send payment link button", models.ClickInput),
        ActionSpec("completePayment", "Click the complete payment with wallet button", models.ClickInput),
    ]


def _rewards_specs() -> list[ActionSpec]:
    return [
        ActionSpec("checkRewardsStatus", "Check if user is a rewards member", models.CheckInput),
        ActionSpec(
            "respondToRewardsPrompt",
            "Respond to rewards membership prompt",
            models.RespondToRewardsPromptInput,
        ),
    ]
