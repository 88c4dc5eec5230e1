"""Application service: Update Payment Status use case.

Asserting the payment status an order already has is a successful
no-op, so replayed or duplicated provider notifications are harmless.
Every other request goes through the aggregate's legality table and is
written with an optimistic version check.
"""

from __future__ import annotations

import logging

from kiosk.domain.exceptions import OrderNotFoundError
from kiosk.domain.model.order import Order, PaymentStatus
from kiosk.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, status: PaymentStatus) -> tuple[Order, bool]:
        """Apply ``status`` to an order.

        Returns the order and whether anything was written.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if order.payment_status == status:
            logger.info(
                "payment status replay ignored order=%s status=%s",
                order_id,
                status.value,
            )
            return order, False

        previous = order.payment_status
        order.transition_payment(status)
        self._order_repo.update_payment_status(order)

        logger.info(
            "payment status updated order=%s %s -> %s",
            order_id,
            previous.value,
            status.value,
        )
        return order, True
