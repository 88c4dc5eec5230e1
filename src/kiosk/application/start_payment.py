"""Application service: Start Payment use case.

Opens a QR payment order at the configured provider for the order's
current total.  The order itself is not touched: its payment status only
moves when the provider's notification comes back through the webhook
reconciler.
"""

from __future__ import annotations

import logging

from kiosk.application.dto import PaymentQRCodeDTO
from kiosk.domain.exceptions import OrderNotFoundError, ValidationError
from kiosk.domain.gateway.payment_gateway import PaymentGateway
from kiosk.domain.model.order import PaymentStatus
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.repository.product_repository import ProductRepository
from kiosk.domain.service.pricing_service import PricingService

logger = logging.getLogger(__name__)


class StartPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        gateway: PaymentGateway,
        notification_url: str | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._pricing = PricingService(product_repo)
        self._gateway = gateway
        self._notification_url = notification_url

    def handle(self, order_id: str, description: str | None = None) -> PaymentQRCodeDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if order.payment_status in (PaymentStatus.APPROVED, PaymentStatus.CANCELLED):
            raise ValidationError(
                f"Order '{order.id}' payment is already {order.payment_status.value}"
            )

        total = self._pricing.total(self._pricing.price(order.items))
        qr = self._gateway.create_qr_order(
            order.id,
            total.amount,
            description or f"Order {order.id}",
            self._notification_url,
        )
        logger.info(
            "payment started for order=%s amount=%s payment=%s",
            order.id,
            total,
            qr.payment_id or "-",
        )
        return PaymentQRCodeDTO(
            order_id=order.id,
            amount=total.amount,
            qr_data=qr.qr_data,
            qr_code_base64=qr.qr_code_base64,
            notification_url=qr.notification_url,
            payment_id=qr.payment_id,
        )
