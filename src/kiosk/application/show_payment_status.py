"""Application service: Show Payment Status use case (query)."""

from __future__ import annotations

from kiosk.application.dto import PaymentStatusDTO
from kiosk.domain.exceptions import OrderNotFoundError
from kiosk.domain.repository.order_repository import OrderRepository


class ShowPaymentStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> PaymentStatusDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return PaymentStatusDTO(
            order_id=order.id,
            payment_status=order.payment_status.value,
            is_approved=order.is_payment_approved,
        )
