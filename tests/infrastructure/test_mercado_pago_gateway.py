"""Tests for the Mercado Pago client, with httpx.MockTransport standing in for the API."""

import json
from decimal import Decimal

import httpx
import pytest

from kiosk.domain.exceptions import PaymentProviderError
from kiosk.infrastructure.config import Settings
from kiosk.infrastructure.payment.mercado_pago import MercadoPagoGateway


def _settings(**overrides) -> Settings:
    fields = dict(
        mercadopago_base_url="https://mp.test/",
        mercadopago_access_token="TEST-token",
        webhook_secret="s3cret",
    )
    fields.update(overrides)
    return Settings(**fields)


def _gateway(handler, **overrides) -> MercadoPagoGateway:
    return MercadoPagoGateway(_settings(**overrides), transport=httpx.MockTransport(handler))


class TestMercadoPagoGateway:

    def test_fetch_payment(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={
                "id": 123,
                "status": "approved",
                "status_detail": "accredited",
                "external_reference": "o-1",
                "transaction_amount": 31.98,
            })

        payment = _gateway(handler).fetch_payment_by_id("123")
        assert payment.id == "123"
        assert payment.status == "approved"
        assert payment.external_reference == "o-1"
        assert payment.transaction_amount == Decimal("31.98")
        assert str(seen[0].url) == "https://mp.test/v1/payments/123"
        assert seen[0].headers["Authorization"] == "Bearer TEST-token"

    def test_fetch_merchant_order(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/merchant_orders/77"
            return httpx.Response(200, json={
                "id": 77,
                "status": "closed",
                "external_reference": "o-1",
                "total_amount": "31.98",
                "paid_amount": "31.98",
            })

        merchant = _gateway(handler).fetch_merchant_order_by_id("77")
        assert merchant.is_fully_paid
        assert merchant.external_reference == "o-1"

    def test_blank_external_reference_is_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": 1, "status": "approved", "external_reference": ""})

        assert _gateway(handler).fetch_payment_by_id("1").external_reference is None

    def test_http_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "not found"})

        with pytest.raises(PaymentProviderError, match="returned 404"):
            _gateway(handler).fetch_payment_by_id("1")

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(PaymentProviderError, match="request failed"):
            _gateway(handler).fetch_payment_by_id("1")

    def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        with pytest.raises(PaymentProviderError, match="invalid JSON"):
            _gateway(handler).fetch_payment_by_id("1")

    def test_non_object_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps([1, 2]).encode())

        with pytest.raises(PaymentProviderError, match="Unexpected"):
            _gateway(handler).fetch_payment_by_id("1")

    def test_signature_without_secret_fails(self):
        gateway = _gateway(lambda request: httpx.Response(200), webhook_secret=None)
        assert not gateway.validate_signature(b"{}", "anything")


class TestCreateQrOrder:
    TOKEN = "APP_USR-123456-010124-abcdef"

    def test_puts_order_for_collector_and_pos(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={
                "qr_data": "00020101021243650016COM.MERCADOLIBRE",
                "in_store_order_id": "abc",
            })

        gateway = _gateway(
            handler,
            mercadopago_access_token=self.TOKEN,
            mercadopago_external_pos_id="CAIXA01",
        )
        qr = gateway.create_qr_order(
            "o-1", Decimal("31.98"), "Order o-1", "https://kiosk.test/webhooks/payment"
        )

        request = seen[0]
        assert request.method == "PUT"
        assert str(request.url) == (
            "https://mp.test/instore/orders/qr/seller/collectors/123456/pos/CAIXA01/qrs"
        )
        assert request.headers["Authorization"] == f"Bearer {self.TOKEN}"
        assert json.loads(request.content) == {
            "external_reference": "o-1",
            "title": "Order o-1",
            "description": "Order o-1",
            "total_amount": 31.98,
            "notification_url": "https://kiosk.test/webhooks/payment",
        }
        assert qr.qr_data == "00020101021243650016COM.MERCADOLIBRE"
        assert qr.qr_code_base64 is None
        assert qr.external_reference == "o-1"
        assert qr.notification_url == "https://kiosk.test/webhooks/payment"
        assert qr.payment_id is None

    def test_notification_url_omitted_when_unset(self):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"qr_data": "x", "qr_code_base64": "aGk="})

        qr = _gateway(handler, mercadopago_access_token=self.TOKEN).create_qr_order(
            "o-1", Decimal("5"), "Soda"
        )
        assert "notification_url" not in bodies[0]
        assert qr.qr_code_base64 == "aGk="

    def test_malformed_token_fails_before_request(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"qr_data": "x"})

        gateway = _gateway(handler, mercadopago_access_token="notoken")
        with pytest.raises(PaymentProviderError, match="Invalid access token format"):
            gateway.create_qr_order("o-1", Decimal("5"), "Soda")
        assert seen == []

    def test_provider_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"message": "invalid pos"})

        gateway = _gateway(handler, mercadopago_access_token=self.TOKEN)
        with pytest.raises(PaymentProviderError, match="400"):
            gateway.create_qr_order("o-1", Decimal("5"), "Soda")

    def test_missing_qr_data(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        gateway = _gateway(handler, mercadopago_access_token=self.TOKEN)
        with pytest.raises(PaymentProviderError, match="no QR data"):
            gateway.create_qr_order("o-1", Decimal("5"), "Soda")
