"""
Order models for PayPal Standard.

Exports the merchant, basket and order section models.
"""
from .order import (
    GATEWAY_URL,
    DEFAULT_FORM_NAME,
    MerchantConfig,
    LineItem,
    CustomerDetails,
    Address,
    ShippingDetails,
    DiscountDetails,
    PresentationOptions,
)

__all__ = [
    "GATEWAY_URL",
    "DEFAULT_FORM_NAME",
    "MerchantConfig",
    "LineItem",
    "CustomerDetails",
    "Address",
    "ShippingDetails",
    "DiscountDetails",
    "PresentationOptions",
]
