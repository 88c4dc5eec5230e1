"""Application service: Checkout use case.

Validates a cart, prices it against the current catalog, creates the
Order aggregate and registers it in the kitchen queue.

The computed prices are returned to the caller but never stored on the
order.  The order write and the queue write are separate; the queue
write is create-if-absent, so a checkout retried with the same
``request_id`` finishes registration instead of creating a second order.
Reusing a ``request_id`` for a different cart or customer is rejected.
"""

from __future__ import annotations

import logging
import time

from kiosk.application.dto import CheckoutResultDTO, OrderItemSpec, PricedItemDTO
from kiosk.domain.exceptions import (
    CustomerNotFoundError,
    EmptyOrderError,
    InvalidOrderError,
)
from kiosk.domain.model.order import Order, OrderItem
from kiosk.domain.model.queue_entry import QueueEntry
from kiosk.domain.model.value_objects import TaxId
from kiosk.domain.repository.customer_repository import CustomerRepository
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.repository.product_repository import ProductRepository
from kiosk.domain.repository.queue_repository import QueueRepository
from kiosk.domain.service.pricing_service import PricingService

logger = logging.getLogger(__name__)


class CheckoutOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
        product_repo: ProductRepository,
        queue_repo: QueueRepository,
        payment_delay: float = 0.0,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo
        self._queue_repo = queue_repo
        self._pricing = PricingService(product_repo)
        self._payment_delay = payment_delay

    def handle(
        self,
        item_specs: list[OrderItemSpec],
        customer_id: str | None = None,
        tax_id: str | None = None,
        request_id: str | None = None,
    ) -> CheckoutResultDTO:
        """Check out a cart.

        Steps:
        1. Reject an empty cart before touching any store.
        2. Resolve the customer, if one was given.
        3. Price every line at the current catalog price.
        4. Build the order (RECEIVED / PENDING); the aggregate validates
           quantities.
        5. Persist the order, then register it in the queue.
        """
        if not item_specs:
            raise EmptyOrderError()

        if customer_id and tax_id:
            raise InvalidOrderError(
                "Provide either a customer id or a CPF, not both"
            )

        if request_id:
            existing = self._order_repo.get_by_id(request_id)
            if existing is not None:
                self._check_same_request(existing, item_specs, customer_id, tax_id)
                return self._replay(existing)

        if customer_id and self._customer_repo.get_by_id(customer_id) is None:
            raise CustomerNotFoundError(customer_id)

        items = [OrderItem(product_id=s.product_id, quantity=s.quantity) for s in item_specs]
        lines = self._pricing.price(items)
        total = self._pricing.total(lines)

        order = Order.create(
            items=items,
            customer_id=customer_id,
            tax_id=TaxId.normalize(tax_id),
            order_id=request_id,
        )

        if self._payment_delay > 0:
            time.sleep(self._payment_delay)

        self._order_repo.save(order)
        self._queue_repo.create(QueueEntry.for_order(order))

        logger.info(
            "checkout created order=%s items=%d total=%s",
            order.id,
            len(order.items),
            total,
        )
        return CheckoutResultDTO(
            order_id=order.id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            items=[PricedItemDTO.from_line(line) for line in lines],
            total_amount=total.amount,
        )

    @staticmethod
    def _check_same_request(
        order: Order,
        item_specs: list[OrderItemSpec],
        customer_id: str | None,
        tax_id: str | None,
    ) -> None:
        requested = [(s.product_id, s.quantity) for s in item_specs]
        stored = [(i.product_id, i.quantity) for i in order.items]
        if (
            requested != stored
            or (customer_id or None) != order.customer_id
            or TaxId.normalize(tax_id) != order.tax_id
        ):
            raise InvalidOrderError(
                f"Request id '{order.id}' was already used for a different order"
            )

    def _replay(self, order: Order) -> CheckoutResultDTO:
        """Finish a checkout whose order was already written."""
        self._queue_repo.create(QueueEntry.for_order(order))
        lines = self._pricing.price(order.items)
        total = self._pricing.total(lines)
        logger.info("checkout replayed order=%s", order.id)
        return CheckoutResultDTO(
            order_id=order.id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            items=[PricedItemDTO.from_line(line) for line in lines],
            total_amount=total.amount,
            replayed=True,
        )
