"""
Checkout API Endpoints

Builds PayPal Standard cart upload payloads from a JSON order.

Flow:
- Request values fall back to the merchant defaults from settings
- Invalid line items and encode failures return 400 with an error code
- /fields returns the ordered field list, /form returns the rendered HTML
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field
from typing import List, Optional
import logging

from ..config import Settings, settings
from ..models.order import Address, CustomerDetails, DiscountDetails, PresentationOptions, ShippingDetails
from ..models.values import FieldNumber
from ..services.encoder_service import OrderEncoder

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings() -> Settings:
    """Settings dependency, overridable in tests."""
    return settings


# ============================================================================
# Request/Response Models
# ============================================================================

class LineItemRequest(BaseModel):
    """Basket row as posted by the client. Validated by the encoder."""
    item_number: Optional[FieldNumber] = None
    item_name: Optional[str] = ""
    amount: FieldNumber = 0
    quantity: FieldNumber = 1
    weight: Optional[FieldNumber] = 0
    shipping: Optional[FieldNumber] = 0
    handling: Optional[FieldNumber] = 0
    discount_amount: Optional[FieldNumber] = 0
    discount_rate: Optional[FieldNumber] = 0
    tax: Optional[FieldNumber] = 0


class PresentationRequest(BaseModel):
    """Presentation overrides. Empty values keep the defaults."""
    button_text: str = ""
    button_class: str = ""
    form_name: str = ""
    form_class: str = ""
    auto_submit: bool = False


class CheckoutRequest(BaseModel):
    """Complete order to encode."""
    recipient: Optional[str] = None  # Defaults to settings.paypal_email
    currency_code: Optional[str] = None
    notify_url: Optional[str] = None
    return_url: Optional[str] = None
    invoice_number: str = ""
    custom_number: str = ""
    items: List[LineItemRequest] = Field(default_factory=list)
    customer: Optional[CustomerDetails] = None
    address: Optional[Address] = None
    shipping: Optional[ShippingDetails] = None
    discount: Optional[DiscountDetails] = None
    tax: Optional[FieldNumber] = None
    presentation: Optional[PresentationRequest] = None


class FormFieldResponse(BaseModel):
    name: str
    value: str


class CheckoutFieldsResponse(BaseModel):
    """Encoded order ready for a client-side form."""
    submit_url: str
    fields: List[FormFieldResponse]
    presentation: PresentationOptions


# ============================================================================
# Encoder Assembly
# ============================================================================

def build_encoder(request: CheckoutRequest, app_settings: Settings) -> OrderEncoder:
    """
    Replay a checkout request onto a fresh encoder.

    Raises:
        InvalidLineItemError: A posted item is missing name, amount or quantity
    """
    encoder = OrderEncoder.from_settings(app_settings)

    if request.recipient is not None:
        encoder.set_recipient(request.recipient)
    if request.currency_code is not None:
        encoder.set_currency(request.currency_code)
    if request.notify_url is not None:
        encoder.set_notify_url(request.notify_url)
    if request.return_url is not None:
        encoder.set_return_url(request.return_url)

    encoder.set_invoice_number(request.invoice_number)
    encoder.set_custom_number(request.custom_number)

    for item in request.items:
        encoder.add_line_item(**item.model_dump())

    if request.customer is not None:
        encoder.set_customer_details(**request.customer.model_dump())
    if request.address is not None:
        encoder.set_address(**request.address.model_dump())
    if request.shipping is not None:
        encoder.set_shipping_details(**request.shipping.model_dump())
    if request.discount is not None:
        encoder.set_discount(
            request.discount.cart_discount_amount,
            request.discount.cart_discount_rate
        )
    if request.tax is not None:
        encoder.set_tax(request.tax)
    if request.presentation is not None:
        encoder.configure_presentation(**request.presentation.model_dump())

    return encoder


# ============================================================================
# Endpoints
# ============================================================================

@router.post("/fields")
async def encode_fields_endpoint(
    request: CheckoutRequest,
    app_settings: Settings = Depends(get_settings)
) -> CheckoutFieldsResponse:
    """
    Encode an order into PayPal Standard form fields.

    Returns:
        {
            "submit_url": str,  # Fixed PayPal gateway
            "fields": [{"name": str, "value": str}, ...],  # Gateway order
            "presentation": PresentationOptions
        }

    Errors:
        400 paypal_standard:encode:missing_recipient
        400 paypal_standard:encode:empty_basket
        400 paypal_standard:basket:invalid_line_item
    """
    logger.info(f"Encoding checkout fields for {len(request.items)} items")

    encoder = build_encoder(request, app_settings)
    fields = encoder.encode()

    return CheckoutFieldsResponse(
        submit_url=encoder.submit_url,
        fields=[FormFieldResponse(name=name, value=value) for name, value in fields],
        presentation=encoder.presentation,
    )


@router.post("/form", response_class=HTMLResponse)
async def render_form_endpoint(
    request: CheckoutRequest,
    app_settings: Settings = Depends(get_settings)
) -> HTMLResponse:
    """Encode an order and return the PayPal checkout form as HTML."""
    logger.info(f"Rendering checkout form for {len(request.items)} items")

    encoder = build_encoder(request, app_settings)
    return HTMLResponse(content=encoder.generate_form())
