"""Shared fixtures for encoder, renderer and API tests."""

import pytest

from paypal_standard.config import Settings
from paypal_standard.services.encoder_service import OrderEncoder

RECIPIENT = "shop@example.com"


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        paypal_email=RECIPIENT,
        currency_code="GBP",
        ipn_url="https://shop.example.com/ipn",
        return_url="https://shop.example.com/basket",
    )


@pytest.fixture
def encoder():
    return OrderEncoder().set_recipient(RECIPIENT)


@pytest.fixture
def widget_encoder(encoder):
    return encoder.add_line_item("Widget", 9.99)
