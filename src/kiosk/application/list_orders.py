"""Application service: order listings for staff tooling (query)."""

from __future__ import annotations

from kiosk.application.dto import OrderSummaryDTO
from kiosk.domain.model.order import Order, OrderStatus
from kiosk.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def all(self) -> list[OrderSummaryDTO]:
        return self._summaries(self._order_repo.list_all())

    def by_status(self, status: OrderStatus) -> list[OrderSummaryDTO]:
        return self._summaries(self._order_repo.list_by_status(status))

    def by_customer(self, customer_id: str) -> list[OrderSummaryDTO]:
        return self._summaries(self._order_repo.list_by_customer(customer_id))

    @staticmethod
    def _summaries(orders: list[Order]) -> list[OrderSummaryDTO]:
        ordered = sorted(orders, key=lambda o: o.created_at)
        return [OrderSummaryDTO.from_order(o) for o in ordered]
