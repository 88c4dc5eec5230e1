"""Domain service: kitchen queue ordering.

Orders closest to pickup come first, and within a stage the oldest
order is served first.
"""

from __future__ import annotations

from typing import Iterable

from kiosk.domain.model.order import Order, OrderStatus

STATUS_PRIORITY: dict[OrderStatus, int] = {
    OrderStatus.READY: 3,
    OrderStatus.IN_PREPARATION: 2,
    OrderStatus.RECEIVED: 1,
}


def priority_of(status: OrderStatus) -> int:
    return STATUS_PRIORITY.get(status, 0)


def prioritize(orders: Iterable[Order]) -> list[Order]:
    """Return a new list sorted by stage priority, then creation time."""
    return sorted(orders, key=lambda o: (-priority_of(o.status), o.created_at))
