"""Tests for the checkout HTTP API."""

import pytest
from fastapi.testclient import TestClient

from paypal_standard.api.checkout import get_settings
from paypal_standard.config import Settings
from paypal_standard.main import app

from .conftest import RECIPIENT

WIDGET = {"item_name": "Widget", "amount": 9.99}


@pytest.fixture
def client(test_settings):
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def field_map(response):
    return {field["name"]: field["value"] for field in response.json()["fields"]}


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestFieldsEndpoint:
    def test_minimum_order_uses_settings_defaults(self, client):
        response = client.post("/api/checkout/fields", json={"items": [WIDGET]})

        assert response.status_code == 200
        body = response.json()
        assert body["submit_url"] == "https://www.paypal.com/cgi-bin/webscr"
        assert body["fields"][0] == {"name": "cmd", "value": "_cart"}
        fields = field_map(response)
        assert fields["business"] == RECIPIENT
        assert fields["item_name_1"] == "Widget"
        assert fields["amount_1"] == "9.99"
        assert fields["quantity_1"] == "1"
        assert fields["notify_url"] == "https://shop.example.com/ipn"

    def test_request_overrides_merchant_defaults(self, client):
        response = client.post(
            "/api/checkout/fields",
            json={"recipient": "other@example.com", "currency_code": "EUR", "notify_url": "", "items": [WIDGET]},
        )

        fields = field_map(response)
        assert fields["business"] == "other@example.com"
        assert fields["currency_code"] == "EUR"
        assert "notify_url" not in fields

    def test_order_sections(self, client):
        response = client.post(
            "/api/checkout/fields",
            json={
                "items": [WIDGET, {"item_name": "Gadget", "amount": "5.00", "quantity": 2, "weight": 0}],
                "invoice_number": "INV-7",
                "customer": {"first_name": "Ada", "email": "ada@example.com"},
                "address": {"line1": "1 High St", "town": "Leeds", "force_use": True},
                "shipping": {"weight_units": "stones", "cart_weight": "heavy", "shipping_cost": 4},
                "discount": {"cart_discount_amount": "abc", "cart_discount_rate": 5},
                "tax": "1.20",
            },
        )

        assert response.status_code == 200
        fields = field_map(response)
        assert fields["amount_2"] == "5.00"
        assert fields["quantity_2"] == "2"
        assert "weight_2" not in fields
        assert fields["invoice"] == "INV-7"
        assert fields["first_name"] == "Ada"
        assert "last_name" not in fields
        assert fields["city"] == "Leeds"
        assert fields["country"] == "GB"
        assert fields["address_override"] == "1"
        assert fields["weight_units"] == "kgs"
        assert "weight_cart" not in fields
        assert fields["shipping"] == "4"
        assert "discount_amount_cart" not in fields
        assert fields["discount_rate_cart"] == "5"
        assert fields["tax"] == "1.20"

    def test_presentation_returned(self, client):
        response = client.post(
            "/api/checkout/fields",
            json={"items": [WIDGET], "presentation": {"auto_submit": True}},
        )

        presentation = response.json()["presentation"]
        assert presentation["auto_submit"] is True
        assert presentation["form_name"] == "paypal_standard_payment_form"
        assert presentation["button_text"] == "PayPal Checkout"

    def test_empty_basket(self, client):
        response = client.post("/api/checkout/fields", json={"items": []})

        assert response.status_code == 400
        assert response.json()["error_code"] == "paypal_standard:encode:empty_basket"

    def test_missing_recipient(self, client):
        response = client.post("/api/checkout/fields", json={"recipient": "", "items": [WIDGET]})

        assert response.status_code == 400
        assert response.json()["error_code"] == "paypal_standard:encode:missing_recipient"

    def test_invalid_line_item(self, client):
        response = client.post(
            "/api/checkout/fields",
            json={"items": [WIDGET, {"item_name": "Gadget", "amount": 0}]},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "paypal_standard:basket:invalid_line_item"
        assert body["details"]["invalid_fields"] == ["amount"]

    def test_null_optional_values_omitted(self, client):
        response = client.post(
            "/api/checkout/fields",
            json={
                "items": [{"item_name": "Widget", "amount": 9.99, "weight": None}],
                "customer": {"first_name": "Ada", "last_name": None},
                "address": {"line1": "1 High St", "line2": None},
            },
        )

        assert response.status_code == 200
        fields = field_map(response)
        assert "weight_1" not in fields
        assert "last_name" not in fields
        assert "address2" not in fields
        assert fields["address1"] == "1 High St"


class TestFormEndpoint:
    def test_renders_html(self, client):
        response = client.post(
            "/api/checkout/form",
            json={"items": [{"item_name": "Fish & Chips", "amount": 7.5}], "presentation": {"auto_submit": True}},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'value="Fish &amp; Chips"' in response.text
        assert 'document.forms["paypal_standard_payment_form"].submit();' in response.text

    def test_errors_are_json(self, client):
        response = client.post("/api/checkout/form", json={"items": []})

        assert response.status_code == 400
        assert response.json()["error_code"] == "paypal_standard:encode:empty_basket"


class TestSettings:
    def test_defaults(self):
        defaults = Settings(_env_file=None)

        assert defaults.currency_code == "GBP"
        assert defaults.log_level == "INFO"

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("PAYPAL_STANDARD_PAYPAL_EMAIL", "env@example.com")

        assert Settings(_env_file=None).paypal_email == "env@example.com"
