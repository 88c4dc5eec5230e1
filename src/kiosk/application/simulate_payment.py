"""Application service: simulated payment flow.

Lets staff and tests drive a payment end to end without a real provider:
a charge opened when payment starts is settled by hand, and the resulting
notification travels through the same webhook reconciler the live
provider uses.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from kiosk.application.dto import ChargeDTO, WebhookOutcomeDTO
from kiosk.application.reconcile_webhook import PAYMENT, WebhookReconciler
from kiosk.domain.exceptions import ValidationError
from kiosk.domain.gateway.payment_gateway import Charge, SimulatedPaymentGateway

logger = logging.getLogger(__name__)


def _to_dto(charge: Charge) -> ChargeDTO:
    return ChargeDTO(
        payment_id=charge.id,
        order_id=charge.order_id,
        amount=charge.amount,
        status=charge.status,
    )


class SimulatePaymentHandler:

    def __init__(self, gateway: SimulatedPaymentGateway, reconciler: WebhookReconciler) -> None:
        self._gateway = gateway
        self._reconciler = reconciler

    def approve(self, payment_id: str) -> WebhookOutcomeDTO:
        return self._settle(payment_id, "approved")

    def reject(self, payment_id: str) -> WebhookOutcomeDTO:
        return self._settle(payment_id, "rejected")

    def cancel(self, payment_id: str) -> WebhookOutcomeDTO:
        return self._settle(payment_id, "cancelled")

    def list_charges(self) -> list[ChargeDTO]:
        return [_to_dto(c) for c in self._gateway.list_charges()]

    def clear_old(self, hours: float = 24) -> int:
        """Forget charges opened more than ``hours`` ago."""
        if hours < 0:
            raise ValidationError("hours cannot be negative")
        return self._gateway.clear_charges_older_than(timedelta(hours=hours))

    def _settle(self, payment_id: str, status: str) -> WebhookOutcomeDTO:
        self._gateway.set_charge_status(payment_id, status)
        payload = {
            "id": uuid4().hex,
            "type": PAYMENT,
            "action": "payment.updated",
            "date_created": datetime.now(timezone.utc).isoformat(),
            "live_mode": False,
            "data": {"id": payment_id},
        }
        return self._reconciler.handle(json.dumps(payload))
