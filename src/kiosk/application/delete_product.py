"""Application service: Delete Product use case.

Orders price their items against the catalog on every read, so a product
still referenced by an order that is not finished cannot be removed.
Finished and cancelled orders do not hold a product back; showing one
afterwards reports the product as not found.
"""

from __future__ import annotations

import logging

from kiosk.domain.exceptions import ProductNotFoundError, ValidationError
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository, order_repo: OrderRepository) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def handle(self, product_id: str) -> None:
        if self._product_repo.get_by_id(product_id) is None:
            raise ProductNotFoundError(product_id)

        blocking = [
            order.id
            for order in self._order_repo.list_all()
            if not order.is_terminal
            and any(item.product_id == product_id for item in order.items)
        ]
        if blocking:
            raise ValidationError(
                f"Product '{product_id}' is still part of {len(blocking)} open order(s)"
            )

        if not self._product_repo.delete(product_id):
            raise ProductNotFoundError(product_id)
        logger.info("product %s deleted", product_id)
