"""Application service: Kitchen order queue.

Serves the kitchen display and drives the order workflow.  Queue entries
are a denormalized index of outstanding orders; the order store remains
the source of truth for status and items, so every listing re-reads the
orders it shows and prices them against the current catalog.

Cancelled orders stay on the display until ``prune_cancelled`` removes
them; finished orders drop off on their own.
"""

from __future__ import annotations

import logging

from kiosk.application.dto import OrderDTO, QueueEntryDTO
from kiosk.domain.exceptions import OrderNotFoundError
from kiosk.domain.model.order import Order, OrderStatus
from kiosk.domain.model.queue_entry import QueueEntry
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.repository.product_repository import ProductRepository
from kiosk.domain.repository.queue_repository import QueueRepository
from kiosk.domain.service.preparation_policy import PaymentApprovedPolicy
from kiosk.domain.service.pricing_service import PricingService
from kiosk.domain.service.queue_prioritizer import prioritize

logger = logging.getLogger(__name__)


class OrderQueueService:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        queue_repo: QueueRepository,
        policy: PaymentApprovedPolicy | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._queue_repo = queue_repo
        self._pricing = PricingService(product_repo)
        self._policy = policy or PaymentApprovedPolicy()

    # --- Display --------------------------------------------------------------

    def list_active(self) -> list[OrderDTO]:
        """Outstanding orders, highest stage first and oldest first within one.

        All-or-nothing: one unresolved product fails the whole listing.
        """
        orders: list[Order] = []
        for entry in self._queue_repo.list_all():
            if entry.status == OrderStatus.FINISHED:
                continue
            order = self._order_repo.get_by_id(entry.order_id)
            if order is None:
                raise OrderNotFoundError(entry.order_id)
            if order.is_active:
                orders.append(order)

        result: list[OrderDTO] = []
        for order in prioritize(orders):
            lines = self._pricing.price(order.items)
            total = self._pricing.total(lines)
            result.append(OrderDTO.build(order, lines, total.amount))
        return result

    def list_by_status(self, status: OrderStatus) -> list[QueueEntryDTO]:
        return [QueueEntryDTO.from_entry(e) for e in self._queue_repo.list_by_status(status)]

    def list_all(self) -> list[QueueEntryDTO]:
        return [QueueEntryDTO.from_entry(e) for e in self._queue_repo.list_all()]

    # --- Workflow -------------------------------------------------------------

    def update_status(self, order_id: str, status: OrderStatus) -> QueueEntryDTO:
        """Move an order through the kitchen workflow.

        The preparation policy runs before the legality table, so an
        unpaid order is refused entry to IN_PREPARATION even when the
        move would otherwise be legal.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        self._policy.check(order, status)

        previous = order.status
        order.transition_status(status)
        self._order_repo.update_status(order)

        self._queue_repo.create(QueueEntry.for_order(order))
        entry = self._queue_repo.update_status(order_id, order.status)

        logger.info(
            "order status updated order=%s %s -> %s",
            order_id,
            previous.value,
            order.status.value,
        )
        return QueueEntryDTO.from_entry(entry)

    # --- Maintenance ----------------------------------------------------------

    def prune_cancelled(self) -> int:
        """Take acknowledged cancelled orders off the display."""
        removed = 0
        for entry in self._queue_repo.list_by_status(OrderStatus.CANCELLED):
            if self._queue_repo.delete(entry.order_id):
                removed += 1
        logger.info("pruned %d cancelled queue entries", removed)
        return removed

    def rebuild(self) -> int:
        """Recreate missing entries and re-mirror statuses from the order store.

        Orders already in a terminal status get no new entry, so pruned
        cancellations stay pruned.
        """
        created = 0
        for order in self._order_repo.list_all():
            existing = self._queue_repo.get_by_order_id(order.id)
            if existing is None:
                if order.is_terminal:
                    continue
                self._queue_repo.create(QueueEntry.for_order(order))
                created += 1
            elif existing.status != order.status:
                self._queue_repo.update_status(order.id, order.status)
        logger.info("queue rebuilt, %d entries created", created)
        return created
