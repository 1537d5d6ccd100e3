"""
PayPal Standard - Website Payments Standard cart form builder.

Typical use:

    from paypal_standard import OrderEncoder

    encoder = OrderEncoder().set_recipient("shop@example.com")
    encoder.add_line_item("Item for Sale", 9.99)
    html = encoder.generate_form()
"""

__version__ = "0.1.0"

from .exceptions import (
    PaymentFormError,
    MissingRecipientError,
    EmptyBasketError,
    InvalidLineItemError,
)
from .services.encoder_service import OrderEncoder
from .services.form_service import render_form

__all__ = [
    "OrderEncoder",
    "render_form",
    "PaymentFormError",
    "MissingRecipientError",
    "EmptyBasketError",
    "InvalidLineItemError",
]
