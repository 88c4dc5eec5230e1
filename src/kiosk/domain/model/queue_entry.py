"""QueueEntry: the kitchen queue's shadow record of an order.

A denormalized index over orders that are still outstanding.  It mirrors
the order status and can always be rebuilt from the order store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from kiosk.domain.model.order import Order, OrderStatus


@dataclass
class QueueEntry:

    id: str
    order_id: str
    status: OrderStatus = OrderStatus.RECEIVED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def for_order(order: Order) -> QueueEntry:
        return QueueEntry(
            id=str(uuid4()),
            order_id=order.id,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    def mirror(self, status: OrderStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(timezone.utc)
