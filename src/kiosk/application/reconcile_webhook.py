"""Application service: Payment webhook reconciliation.

Translates a payment provider's asynchronous notifications into payment
status transitions on our orders.  The same reconciler serves the live
provider and the simulator; only the injected ``PaymentGateway`` differs.

Signature and payload shape are checked before the provider is called
or any order is loaded, so malformed input never has a partial effect.
"""

from __future__ import annotations

import json
import logging

from kiosk.application.dto import WebhookOutcomeDTO
from kiosk.application.update_payment_status import UpdatePaymentStatusHandler
from kiosk.domain.exceptions import (
    InvalidSignatureError,
    MalformedWebhookError,
    MissingExternalReferenceError,
)
from kiosk.domain.gateway.payment_gateway import PaymentGateway
from kiosk.domain.model.order import PaymentStatus

logger = logging.getLogger(__name__)

PAYMENT = "payment"
MERCHANT_ORDER = "merchant_order"
SUPPORTED_TYPES = frozenset({PAYMENT, MERCHANT_ORDER})

# Provider vocabulary -> internal payment status.
PROVIDER_STATUS_MAP: dict[str, PaymentStatus] = {
    "approved": PaymentStatus.APPROVED,
    "pending": PaymentStatus.PENDING,
    "in_process": PaymentStatus.PENDING,
    "authorized": PaymentStatus.PENDING,
    "in_mediation": PaymentStatus.PENDING,
    "rejected": PaymentStatus.REJECTED,
    "charged_back": PaymentStatus.REJECTED,
    "cancelled": PaymentStatus.CANCELLED,
    "refunded": PaymentStatus.CANCELLED,
}


def map_provider_status(provider_status: str | None) -> PaymentStatus:
    """Unknown or missing statuses are treated as still pending."""
    return PROVIDER_STATUS_MAP.get((provider_status or "").lower(), PaymentStatus.PENDING)


class WebhookReconciler:

    def __init__(
        self,
        gateway: PaymentGateway,
        payment_updater: UpdatePaymentStatusHandler,
    ) -> None:
        self._gateway = gateway
        self._payment_updater = payment_updater

    def handle(
        self,
        raw_payload: bytes | str,
        signature: str | None = None,
    ) -> WebhookOutcomeDTO:
        body = raw_payload.encode("utf-8") if isinstance(raw_payload, str) else raw_payload

        if signature and not self._gateway.validate_signature(body, signature):
            logger.warning("webhook rejected: invalid signature")
            raise InvalidSignatureError()

        notification_type, resource_id = self._parse(body)
        logger.info("webhook received type=%s id=%s", notification_type, resource_id)

        if notification_type == PAYMENT:
            return self._reconcile_payment(resource_id)
        return self._reconcile_merchant_order(resource_id)

    # --- Notification kinds ---------------------------------------------------

    def _reconcile_payment(self, payment_id: str) -> WebhookOutcomeDTO:
        payment = self._gateway.fetch_payment_by_id(payment_id)
        if not payment.external_reference:
            raise MissingExternalReferenceError(
                f"Payment '{payment_id}' does not have an external reference"
            )

        status = map_provider_status(payment.status)
        order, applied = self._payment_updater.handle(payment.external_reference, status)
        return WebhookOutcomeDTO(
            notification_type=PAYMENT,
            resource_id=payment_id,
            order_id=order.id,
            payment_status=order.payment_status.value,
            applied=applied,
        )

    def _reconcile_merchant_order(self, merchant_order_id: str) -> WebhookOutcomeDTO:
        merchant_order = self._gateway.fetch_merchant_order_by_id(merchant_order_id)
        if not merchant_order.external_reference:
            raise MissingExternalReferenceError(
                f"Merchant order '{merchant_order_id}' does not have an external reference"
            )

        if not merchant_order.is_fully_paid:
            logger.info(
                "merchant order %s not fully paid yet (%s of %s)",
                merchant_order_id,
                merchant_order.paid_amount,
                merchant_order.total_amount,
            )
            return WebhookOutcomeDTO(
                notification_type=MERCHANT_ORDER,
                resource_id=merchant_order_id,
                order_id=merchant_order.external_reference,
                payment_status=None,
                applied=False,
            )

        order, applied = self._payment_updater.handle(
            merchant_order.external_reference, PaymentStatus.APPROVED
        )
        return WebhookOutcomeDTO(
            notification_type=MERCHANT_ORDER,
            resource_id=merchant_order_id,
            order_id=order.id,
            payment_status=order.payment_status.value,
            applied=applied,
        )

    # --- Payload validation ---------------------------------------------------

    @staticmethod
    def _parse(body: bytes) -> tuple[str, str]:
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise MalformedWebhookError("Webhook payload is not valid JSON") from exc

        if not isinstance(payload, dict):
            raise MalformedWebhookError("Invalid webhook payload structure")

        data = payload.get("data")
        resource_id = data.get("id") if isinstance(data, dict) else None
        notification_type = payload.get("type")
        if not payload.get("id") or not notification_type or not resource_id:
            raise MalformedWebhookError("Invalid webhook payload structure")

        if notification_type not in SUPPORTED_TYPES:
            raise MalformedWebhookError(f"Unsupported webhook type: {notification_type}")

        return str(notification_type), str(resource_id)
