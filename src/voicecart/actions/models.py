"""Argument models for every action the live model may call."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Route = Literal[
    "/",
    "/all",
    "/women-casual-jeans",
    "/baby-boot-jean",
    "/gap-logo-tote",
    "/cart",
    "/order-payment-confirmation",
    "/profile",
    "/personalized",
]
ProductId = Literal["gap-logo-tote", "baby-boot-jean"]
Fit = Literal["Regular", "Tall", "Petite"]
Size = Literal[
    "XXS", "XS", "S", "M", "L", "XL", "XXL",
    "24", "25", "26", "27", "28", "29", "30", "31", "32", "33", "34", "35",
]  # fmt: skip
Inseam = Literal["Short", "Regular", "Long"]
ShippingField = Literal["fullName", "street", "apt", "city", "zipCode"]
ShippingMethod = Literal[
    "No-Rush Shipping",
    "Basic Shipping",
    "Standard Shipping",
    "Express Shipping",
    "Priority Shipping",
]
Category = Literal["belts", "sweaters", "all"]


class ActionInput(BaseModel):
    """Base for action arguments: strict types, unknown keys ignored."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class NavigateInput(ActionInput):
    route: Route = Field(..., description="The route to navigate to")


class AddToCartInput(ActionInput):
    product_id: ProductId = Field(..., alias="productId", description="ID of the product to add")


class SelectFitInput(ActionInput):
    fit: Fit = Field(..., description="The fit option to select")


class SelectSizeInput(ActionInput):
    size: Size = Field(..., description="The size option to select")


class SelectInseamInput(ActionInput):
    inseam: Inseam = Field(..., description="The inseam option to select")


class SetFullNameInput(ActionInput):
    name: str = Field(..., min_length=1, description="The full name to set in the form")


class SetShippingFieldInput(ActionInput):
    field: ShippingField = Field(..., description="The field to update in the form")
    value: str = Field(..., min_length=1, description="The value to set in the field")


class SelectShippingMethodInput(ActionInput):
    method: ShippingMethod = Field(..., description="The shipping method to select")


class ClickInput(ActionInput):
    action: Literal["click"] | None = Field(default=None, description="Action to perform")


class CheckInput(ActionInput):
    action: Literal["check"] | None = Field(default=None, description="Action to perform")


class SetPhoneNumberInput(ActionInput):
    phone_number: str = Field(..., min_length=1, alias="phoneNumber", description="The phone number to set in the form")


class SetVerificationCodeInput(ActionInput):
    code: str = Field(..., min_length=1, description="The verification code to enter")


class ShowPersonalizedItemsInput(ActionInput):
    category: Category = Field(..., description="Category of items to show")


class RespondToRewardsPromptInput(ActionInput):
    is_rewards_member: bool = Field(..., alias="isRewardsMember", description="Whether the user is a rewards member")
