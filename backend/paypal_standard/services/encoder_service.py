"""
Order Encoder Service

Accumulates order state and projects it onto the PayPal Website Payments
Standard cart upload vocabulary (cmd=_cart, upload=1).

Emission Rules:
- Fixed protocol fields first, then basket rows, then order level sections
- Any optional value that is empty or zero is left out of the form
- Values are emitted exactly as supplied, escaping is the renderer's job
"""
from typing import Any, List, Optional, Tuple
import logging

from pydantic import ValidationError

from ..config import Settings
from ..exceptions import EmptyBasketError, InvalidLineItemError, MissingRecipientError
from ..models.order import (
    DEFAULT_COUNTRY,
    DEFAULT_FORM_NAME,
    Address,
    CustomerDetails,
    DiscountDetails,
    LineItem,
    MerchantConfig,
    PresentationOptions,
    ShippingDetails,
    missing_required_fields,
)
from ..models.values import coerce_numeric, is_empty, to_field_value
from .form_service import render_form

logger = logging.getLogger(__name__)

FormField = Tuple[str, str]

PROTOCOL_FIELDS: List[FormField] = [
    ("cmd", "_cart"),
    ("upload", "1"),
    ("no_note", "1"),
    ("charset", "utf-8"),
]

# Optional per-row columns, in emission order
LINE_ITEM_OPTIONAL_FIELDS = (
    "quantity",
    "weight",
    "shipping",
    "handling",
    "discount_amount",
    "discount_rate",
    "tax",
)


class OrderEncoder:
    """
    Mutable order aggregate owned by a single caller.

    Setters return the encoder so calls can be chained:

        encoder = (
            OrderEncoder()
            .set_recipient("shop@example.com")
            .add_line_item("Widget", 9.99)
        )
        fields = encoder.encode()

    Not safe for concurrent mutation; encode() never mutates state.
    """

    def __init__(self, merchant: Optional[MerchantConfig] = None):
        self.merchant = merchant or MerchantConfig()
        self.invoice_number = ""
        self.custom_number = ""
        self.basket: List[LineItem] = []
        self.customer = CustomerDetails()
        self.address = Address()
        self.shipping = ShippingDetails()
        self.discount = DiscountDetails()
        self.tax: Optional[Any] = None
        self.presentation = PresentationOptions()

    @classmethod
    def from_settings(cls, settings: Settings) -> "OrderEncoder":
        """Create an encoder seeded with the merchant defaults from settings."""
        return cls(MerchantConfig(
            recipient=settings.paypal_email,
            currency_code=settings.currency_code,
            notify_url=settings.ipn_url,
            return_url=settings.return_url,
        ))

    # ========================================================================
    # Merchant
    # ========================================================================

    def set_recipient(self, email: str = "") -> "OrderEncoder":
        """Set the business PayPal email that receives the payment."""
        self.merchant = self.merchant.model_copy(update={"recipient": email})
        return self

    def set_notify_url(self, url: str = "") -> "OrderEncoder":
        """Set the IPN URL, overriding the one stored in the PayPal account."""
        self.merchant = self.merchant.model_copy(update={"notify_url": url})
        return self

    def set_return_url(self, url: str = "") -> "OrderEncoder":
        self.merchant = self.merchant.model_copy(update={"return_url": url})
        return self

    def set_currency(self, code: str = "") -> "OrderEncoder":
        self.merchant = self.merchant.model_copy(update={"currency_code": code})
        return self

    def set_invoice_number(self, value: Any = "") -> "OrderEncoder":
        """Set the invoice number. PayPal requires it unique and shows it to the buyer."""
        self.invoice_number = value
        return self

    def set_custom_number(self, value: Any = "") -> "OrderEncoder":
        """Set a pass-through value that is never shown to the buyer."""
        self.custom_number = value
        return self

    # ========================================================================
    # Basket
    # ========================================================================

    def add_line_item(
        self,
        item_name: str,
        amount: Any,
        quantity: Any = 1,
        item_number: Any = None,
        weight: Any = 0,
        shipping: Any = 0,
        handling: Any = 0,
        discount_amount: Any = 0,
        discount_rate: Any = 0,
        tax: Any = 0
    ) -> "OrderEncoder":
        """
        Append a row to the basket.

        Args:
            item_name: Description shown on the PayPal checkout (required)
            amount: Unit price (required, non-zero)
            quantity: Units bought (required, non-zero)
            item_number: Merchant SKU or reference
            weight, shipping, handling, discount_amount, discount_rate, tax:
                Optional per-row values, left out of the form when None or zero

        Raises:
            InvalidLineItemError: item_name, amount or quantity is empty/zero,
                or a value is of a type that cannot be sent (e.g. a list).
                The basket is left unchanged.
        """
        missing = missing_required_fields(item_name, amount, quantity)
        if missing:
            logger.warning(f"Rejected line item {item_name!r}: empty {', '.join(missing)}")
            raise InvalidLineItemError(missing, {"item_name": item_name})

        try:
            item = LineItem(
                item_number=item_number,
                item_name=item_name,
                amount=amount,
                quantity=quantity,
                weight=weight,
                shipping=shipping,
                handling=handling,
                discount_amount=discount_amount,
                discount_rate=discount_rate,
                tax=tax,
            )
        except ValidationError as e:
            invalid = list(dict.fromkeys(str(error["loc"][0]) for error in e.errors()))
            logger.warning(f"Rejected line item {item_name!r}: invalid {', '.join(invalid)}")
            raise InvalidLineItemError(invalid, {"item_name": str(item_name)}) from e
        self.basket.append(item)
        logger.debug(f"Added line item {len(self.basket)}: {item_name}")
        return self

    # ========================================================================
    # Order Sections (whole-unit replacement)
    # ========================================================================

    def set_customer_details(
        self,
        first_name: Optional[str] = "",
        last_name: Optional[str] = "",
        email: Optional[str] = ""
    ) -> "OrderEncoder":
        """Prefill buyer details for customers without a PayPal account."""
        self.customer = CustomerDetails(first_name=first_name, last_name=last_name, email=email)
        return self

    def set_address(
        self,
        line1: Optional[str] = "",
        line2: Optional[str] = "",
        town: Optional[str] = "",
        post_code: Optional[str] = "",
        country_code: Optional[str] = DEFAULT_COUNTRY,
        force_use: Optional[bool] = False
    ) -> "OrderEncoder":
        """Prefill the buyer address. force_use stops the buyer from changing it."""
        self.address = Address(
            line1=line1,
            line2=line2,
            town=town,
            post_code=post_code,
            country_code=country_code,
            force_use=force_use,
        )
        return self

    def set_shipping_details(self, weight_units: Any = "", cart_weight: Any = "", shipping_cost: Any = "") -> "OrderEncoder":
        self.shipping = ShippingDetails(
            weight_units=weight_units,
            cart_weight=cart_weight,
            shipping_cost=shipping_cost,
        )
        if self.shipping.weight_units != weight_units:
            logger.debug(f"Weight units {weight_units!r} replaced with {self.shipping.weight_units}")
        return self

    def set_discount(self, amount: Any = 0, rate: Any = 0) -> "OrderEncoder":
        """Set cart level discounts. Non-numeric values are dropped."""
        self.discount = DiscountDetails(cart_discount_amount=amount, cart_discount_rate=rate)
        return self

    def set_tax(self, value: Any = 0) -> "OrderEncoder":
        """Set cart level tax. Non-numeric values are dropped."""
        self.tax = coerce_numeric(value)
        if self.tax is None and value is not None:
            logger.debug(f"Ignoring non-numeric tax value {value!r}")
        return self

    def configure_presentation(
        self,
        button_text: str = "",
        button_class: str = "",
        form_name: str = "",
        form_class: str = "",
        auto_submit: bool = False
    ) -> "OrderEncoder":
        """
        Update button and form options.

        Empty arguments keep the current value. Auto-submit needs a named
        form, so a default name is used when none has been given.
        """
        updates = {
            name: value
            for name, value in (
                ("button_text", button_text),
                ("button_class", button_class),
                ("form_name", form_name),
                ("form_class", form_class),
            )
            if not is_empty(value)
        }
        updates["auto_submit"] = bool(auto_submit)
        if auto_submit and is_empty(updates.get("form_name", self.presentation.form_name)):
            updates["form_name"] = DEFAULT_FORM_NAME

        self.presentation = self.presentation.model_copy(update=updates)
        return self

    # ========================================================================
    # Encoding
    # ========================================================================

    @property
    def submit_url(self) -> str:
        return self.merchant.submit_url

    def encode(self) -> List[FormField]:
        """
        Build the ordered (name, value) pairs for the PayPal form.

        Returns:
            List of field tuples in gateway order

        Raises:
            MissingRecipientError: No business email set
            EmptyBasketError: No line items added
        """
        if is_empty(self.merchant.recipient):
            raise MissingRecipientError()
        if not self.basket:
            raise EmptyBasketError(details={"recipient": self.merchant.recipient})

        fields: List[FormField] = list(PROTOCOL_FIELDS)

        def emit(name: str, value: Any) -> None:
            if not is_empty(value):
                fields.append((name, to_field_value(value)))

        for index, item in enumerate(self.basket, start=1):
            emit(f"item_number_{index}", item.item_number)
            fields.append((f"item_name_{index}", to_field_value(item.item_name)))
            fields.append((f"amount_{index}", to_field_value(item.amount)))
            for column in LINE_ITEM_OPTIONAL_FIELDS:
                emit(f"{column}_{index}", getattr(item, column))

        # Order details
        fields.append(("business", to_field_value(self.merchant.recipient)))
        emit("currency_code", self.merchant.currency_code)
        emit("invoice", self.invoice_number)
        emit("custom", self.custom_number)
        emit("shopping_url", self.merchant.return_url)
        emit("notify_url", self.merchant.notify_url)

        emit("tax", self.tax)

        emit("shipping", self.shipping.shipping_cost)
        emit("weight_units", self.shipping.weight_units)
        emit("weight_cart", self.shipping.cart_weight)

        emit("discount_amount_cart", self.discount.cart_discount_amount)
        emit("discount_rate_cart", self.discount.cart_discount_rate)

        emit("first_name", self.customer.first_name)
        emit("last_name", self.customer.last_name)
        emit("email", self.customer.email)

        emit("address1", self.address.line1)
        emit("address2", self.address.line2)
        emit("city", self.address.town)
        emit("zip", self.address.post_code)
        emit("country", self.address.country_code)
        emit("address_override", self.address.force_use)

        logger.info(
            f"Encoded order for {self.merchant.recipient}: "
            f"{len(self.basket)} line items, {len(fields)} fields"
        )
        return fields

    def generate_form(self) -> str:
        """Encode the order and render it as an HTML form."""
        return render_form(self.encode(), self.presentation, self.submit_url)
