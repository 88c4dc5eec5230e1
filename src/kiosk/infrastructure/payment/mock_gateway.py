"""Simulated payment provider.

Speaks the same vocabulary as Mercado Pago (``pending``, ``approved``,
``rejected``, ``cancelled``) so notifications it produces are reconciled
exactly like live ones.  A charge doubles as its own merchant order.
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from kiosk.domain.exceptions import PaymentProviderError
from kiosk.domain.gateway.payment_gateway import (
    Charge,
    ProviderMerchantOrder,
    ProviderPayment,
    QRCodeOrder,
    SimulatedPaymentGateway,
)
from kiosk.infrastructure.payment.charge_store import ChargeStore
from kiosk.infrastructure.payment.signing import verify_signature

logger = logging.getLogger(__name__)

STATUS_DETAILS = {
    "pending": "pending_waiting_payment",
    "approved": "accredited",
    "rejected": "cc_rejected_other_reason",
    "cancelled": "by_collector",
}


class MockPaymentGateway(SimulatedPaymentGateway):

    def __init__(self, store: ChargeStore, webhook_secret: str | None = None) -> None:
        self._store = store
        self._webhook_secret = webhook_secret

    # --- SimulatedPaymentGateway ----------------------------------------------

    def create_charge(self, order_id: str, amount: Decimal) -> Charge:
        charge = Charge(
            id=f"mock_payment_{uuid4().hex[:12]}",
            order_id=order_id,
            amount=amount,
            status="pending",
        )
        self._store.save(charge)
        return charge

    def set_charge_status(self, payment_id: str, status: str) -> Charge:
        charge = self._require(payment_id)
        # Only a pending charge can be settled; cancellation is always allowed.
        if charge.status == "pending" or status == "cancelled":
            charge = replace(charge, status=status)
            self._store.save(charge)
            logger.info("simulated charge %s -> %s", payment_id, status)
        else:
            logger.info(
                "simulated charge %s already %s, %s ignored",
                payment_id,
                charge.status,
                status,
            )
        return charge

    def list_charges(self) -> list[Charge]:
        return self._store.list_all()

    def clear_charges_older_than(self, age: timedelta) -> int:
        cutoff = datetime.now(timezone.utc) - age
        removed = 0
        for charge in self._store.list_all():
            if charge.created_at < cutoff and self._store.delete(charge.id):
                removed += 1
        if removed:
            logger.info("cleared %d simulated charge(s) older than %s", removed, age)
        return removed

    # --- PaymentGateway -------------------------------------------------------

    def create_qr_order(
        self,
        order_id: str,
        amount: Decimal,
        description: str,
        notification_url: str | None = None,
    ) -> QRCodeOrder:
        charge = self.create_charge(order_id, amount)
        # Not a scannable image: the payload the code would carry, encoded.
        payload = json.dumps(
            {"order_id": order_id, "amount": str(amount), "mock": True}
        ).encode("utf-8")
        return QRCodeOrder(
            external_reference=order_id,
            qr_data=f"mock_qr_data_{order_id}_{charge.id}",
            qr_code_base64="data:image/png;base64," + base64.b64encode(payload).decode("ascii"),
            notification_url=notification_url,
            payment_id=charge.id,
        )

    def fetch_payment_by_id(self, payment_id: str) -> ProviderPayment:
        charge = self._require(payment_id)
        return ProviderPayment(
            id=charge.id,
            status=charge.status,
            external_reference=charge.order_id,
            transaction_amount=charge.amount,
            status_detail=STATUS_DETAILS.get(charge.status),
        )

    def fetch_merchant_order_by_id(self, merchant_order_id: str) -> ProviderMerchantOrder:
        charge = self._require(merchant_order_id)
        paid = charge.status == "approved"
        return ProviderMerchantOrder(
            id=charge.id,
            status="closed" if paid else "opened",
            external_reference=charge.order_id,
            total_amount=charge.amount,
            paid_amount=charge.amount if paid else Decimal("0"),
        )

    def validate_signature(self, payload: bytes, signature: str) -> bool:
        return verify_signature(self._webhook_secret, payload, signature)

    def _require(self, payment_id: str) -> Charge:
        charge = self._store.get(payment_id)
        if charge is None:
            raise PaymentProviderError(f"Payment {payment_id} not found")
        return charge
