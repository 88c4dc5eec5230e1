"""Tests for the simulated payment provider."""

import base64
import json
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from kiosk.domain.exceptions import PaymentProviderError
from kiosk.infrastructure.payment.charge_store import InMemoryChargeStore
from kiosk.infrastructure.payment.mock_gateway import MockPaymentGateway
from kiosk.infrastructure.payment.signing import sign_payload


@pytest.fixture
def gateway():
    return MockPaymentGateway(InMemoryChargeStore(), webhook_secret="s3cret")


class TestMockPaymentGateway:

    def test_charge_reads_as_provider_payment(self, gateway):
        charge = gateway.create_charge("o-1", Decimal("31.98"))
        payment = gateway.fetch_payment_by_id(charge.id)
        assert payment.status == "pending"
        assert payment.external_reference == "o-1"
        assert payment.transaction_amount == Decimal("31.98")
        assert payment.status_detail == "pending_waiting_payment"

    def test_open_charge_is_unpaid_merchant_order(self, gateway):
        charge = gateway.create_charge("o-1", Decimal("10"))
        merchant = gateway.fetch_merchant_order_by_id(charge.id)
        assert merchant.status == "opened"
        assert not merchant.is_fully_paid

    def test_approved_charge_is_fully_paid(self, gateway):
        charge = gateway.create_charge("o-1", Decimal("10"))
        gateway.set_charge_status(charge.id, "approved")
        merchant = gateway.fetch_merchant_order_by_id(charge.id)
        assert merchant.is_fully_paid
        assert merchant.paid_amount == Decimal("10")

    def test_settled_charge_stays_settled(self, gateway):
        charge = gateway.create_charge("o-1", Decimal("10"))
        gateway.set_charge_status(charge.id, "rejected")
        assert gateway.set_charge_status(charge.id, "approved").status == "rejected"

    def test_cancel_always_allowed(self, gateway):
        charge = gateway.create_charge("o-1", Decimal("10"))
        gateway.set_charge_status(charge.id, "approved")
        assert gateway.set_charge_status(charge.id, "cancelled").status == "cancelled"

    def test_unknown_charge(self, gateway):
        with pytest.raises(PaymentProviderError):
            gateway.fetch_payment_by_id("missing")

    def test_signature_uses_configured_secret(self, gateway):
        body = b"{}"
        assert gateway.validate_signature(body, sign_payload("s3cret", body))
        assert not gateway.validate_signature(body, sign_payload("nope", body))

    def test_qr_order_opens_pending_charge(self, gateway):
        qr = gateway.create_qr_order("o-1", Decimal("31.98"), "Order o-1", "http://hook")
        assert qr.external_reference == "o-1"
        assert qr.notification_url == "http://hook"
        assert qr.qr_data == f"mock_qr_data_o-1_{qr.payment_id}"
        prefix = "data:image/png;base64,"
        assert qr.qr_code_base64.startswith(prefix)
        assert json.loads(base64.b64decode(qr.qr_code_base64[len(prefix):])) == {
            "order_id": "o-1",
            "amount": "31.98",
            "mock": True,
        }
        payment = gateway.fetch_payment_by_id(qr.payment_id)
        assert payment.status == "pending"
        assert payment.transaction_amount == Decimal("31.98")

    def test_clear_charges_older_than(self):
        store = InMemoryChargeStore()
        gateway = MockPaymentGateway(store)
        old = gateway.create_charge("o-1", Decimal("1"))
        store.save(replace(old, created_at=datetime.now(timezone.utc) - timedelta(days=2)))
        fresh = gateway.create_charge("o-2", Decimal("1"))

        assert gateway.clear_charges_older_than(timedelta(hours=24)) == 1
        assert [c.id for c in gateway.list_charges()] == [fresh.id]
        with pytest.raises(PaymentProviderError):
            gateway.fetch_payment_by_id(old.id)
