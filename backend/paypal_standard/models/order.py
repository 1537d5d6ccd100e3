"""
Pydantic Order Models for PayPal Website Payments Standard

Merchant settings, basket rows and the whole-unit order sections
(customer, address, shipping, discount, presentation) held by the encoder.
"""
from typing import Any, List, Optional, Literal
from pydantic import BaseModel, Field, field_validator

from .values import FieldNumber, coerce_numeric, is_empty

# Hosted checkout endpoint, fixed by the PayPal Standard contract
GATEWAY_URL = "https://www.paypal.com/cgi-bin/webscr"

DEFAULT_CURRENCY = "GBP"
DEFAULT_COUNTRY = "GB"
DEFAULT_WEIGHT_UNITS = "kgs"
WEIGHT_UNITS = ("lbs", "kgs")
DEFAULT_BUTTON_TEXT = "PayPal Checkout"
DEFAULT_FORM_NAME = "paypal_standard_payment_form"


def missing_required_fields(item_name: Any, amount: Any, quantity: Any) -> List[str]:
    """List the required line item fields that are empty or zero."""
    required = {"item_name": item_name, "amount": amount, "quantity": quantity}
    return [name for name, value in required.items() if is_empty(value)]


# ==================== Merchant ====================

class MerchantConfig(BaseModel):
    """Business account and redirect settings for the order."""
    recipient: str = ""
    currency_code: str = DEFAULT_CURRENCY
    notify_url: str = ""
    return_url: str = ""

    model_config = {"extra": "forbid"}

    @property
    def submit_url(self) -> str:
        """Gateway endpoint the form posts to."""
        return GATEWAY_URL


# ==================== Basket ====================

class LineItem(BaseModel):
    """
    Single basket row.

    Only item_name, amount and quantity are required (see
    missing_required_fields); every other column is optional and
    suppressed from the form when None, empty or zero. Numeric item
    names are kept as text.
    """
    item_number: Optional[FieldNumber] = None
    item_name: str
    amount: FieldNumber
    quantity: FieldNumber = 1
    weight: Optional[FieldNumber] = 0
    shipping: Optional[FieldNumber] = 0
    handling: Optional[FieldNumber] = 0
    discount_amount: Optional[FieldNumber] = 0
    discount_rate: Optional[FieldNumber] = 0
    tax: Optional[FieldNumber] = 0

    model_config = {"frozen": True, "extra": "forbid", "coerce_numbers_to_str": True}


# ==================== Order Sections ====================

class CustomerDetails(BaseModel):
    """Buyer identity, used to prefill PayPal sign-up for guests."""
    first_name: Optional[str] = ""
    last_name: Optional[str] = ""
    email: Optional[str] = ""

    model_config = {"extra": "forbid", "coerce_numbers_to_str": True}


class Address(BaseModel):
    """
    Buyer address prefill.

    country_code must be an ISO 3166 alpha-2 code. force_use stops the
    buyer from overriding the address on the PayPal side. None leaves a
    field out of the form.
    """
    line1: Optional[str] = ""
    line2: Optional[str] = ""
    town: Optional[str] = ""
    post_code: Optional[str] = ""
    country_code: Optional[str] = DEFAULT_COUNTRY
    force_use: Optional[bool] = False

    model_config = {"extra": "forbid", "coerce_numbers_to_str": True}


class ShippingDetails(BaseModel):
    """Cart level shipping. Bad units fall back to kgs, bad numbers to None."""
    weight_units: Literal["lbs", "kgs"] = DEFAULT_WEIGHT_UNITS
    cart_weight: Optional[FieldNumber] = None
    shipping_cost: Optional[FieldNumber] = None

    @field_validator("weight_units", mode="before")
    @classmethod
    def normalize_weight_units(cls, v):
        if v in WEIGHT_UNITS:
            return v
        return DEFAULT_WEIGHT_UNITS

    @field_validator("cart_weight", "shipping_cost", mode="before")
    @classmethod
    def drop_non_numeric(cls, v):
        return coerce_numeric(v)

    model_config = {"extra": "forbid"}


class DiscountDetails(BaseModel):
    """Cart level discount, as an amount and/or a percentage rate."""
    cart_discount_amount: Optional[FieldNumber] = None
    cart_discount_rate: Optional[FieldNumber] = None

    @field_validator("cart_discount_amount", "cart_discount_rate", mode="before")
    @classmethod
    def drop_non_numeric(cls, v):
        return coerce_numeric(v)

    model_config = {"extra": "forbid"}


class PresentationOptions(BaseModel):
    """Button and form options handed to the form renderer."""
    button_text: str = Field(DEFAULT_BUTTON_TEXT, description="Submit button label")
    button_class: str = ""
    form_name: str = ""
    form_class: str = ""
    auto_submit: bool = False

    model_config = {"extra": "forbid"}
