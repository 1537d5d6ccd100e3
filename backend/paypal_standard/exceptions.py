"""
Payment Form Exceptions

Every error carries a paypal_standard:<area>:<reason> code. The API layer
returns the code, message and details to the client as JSON.
"""
from typing import Optional, Dict, Any, List


class PaymentFormError(Exception):
    """Base class; code and details survive the trip to the API response."""

    code = "paypal_standard:error"
    default_message = "Payment form error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.error_code = self.code
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error_code": self.error_code, "message": self.message, "details": self.details}


class MissingRecipientError(PaymentFormError):
    """No business PayPal email configured. Raised by encode(), never by setters."""

    code = "paypal_standard:encode:missing_recipient"
    default_message = "Recipient PayPal email is not set"


class EmptyBasketError(PaymentFormError):
    """Encode was requested before any valid line item was added."""

    code = "paypal_standard:encode:empty_basket"
    default_message = "Basket has no line items"


class InvalidLineItemError(PaymentFormError):
    """
    Line item rejected by add_line_item.

    invalid_fields names the columns at fault: an empty name, a zero or
    empty amount or quantity, or a value of an unsendable type.
    """

    code = "paypal_standard:basket:invalid_line_item"

    def __init__(self, invalid_fields: List[str], details: Optional[Dict[str, Any]] = None):
        self.invalid_fields = invalid_fields
        details = {"invalid_fields": invalid_fields, **(details or {})}
        super().__init__(f"Line item has empty or invalid {', '.join(invalid_fields)}", details)
