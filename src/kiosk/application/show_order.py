"""Application service: Show Order use case (query)."""

from __future__ import annotations

from kiosk.application.dto import OrderDTO
from kiosk.domain.exceptions import OrderNotFoundError
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.repository.product_repository import ProductRepository
from kiosk.domain.service.pricing_service import PricingService


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._pricing = PricingService(product_repo)

    def handle(self, order_id: str) -> OrderDTO:
        """Return the order with its items priced at today's catalog prices."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        lines = self._pricing.price(order.items)
        return OrderDTO.build(order, lines, self._pricing.total(lines).amount)
