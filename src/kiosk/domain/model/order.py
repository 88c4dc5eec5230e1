"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its items and two independent
state machines: the kitchen workflow (``OrderStatus``) and settlement
(``PaymentStatus``).  Both legality tables are plain data so they can be
inspected and enumerated.

Prices are deliberately absent: an order owns quantities, and totals are
derived from the catalog whenever they are read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from kiosk.domain.exceptions import (
    IllegalPaymentTransitionError,
    IllegalStatusTransitionError,
    InvalidOrderError,
)


class OrderStatus(Enum):
    RECEIVED = "RECEIVED"
    IN_PREPARATION = "IN_PREPARATION"
    READY = "READY"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


STATUS_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.RECEIVED: frozenset({OrderStatus.IN_PREPARATION, OrderStatus.CANCELLED}),
    OrderStatus.IN_PREPARATION: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.FINISHED, OrderStatus.CANCELLED}),
    OrderStatus.FINISHED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset(
        {PaymentStatus.APPROVED, PaymentStatus.REJECTED, PaymentStatus.CANCELLED}
    ),
    PaymentStatus.APPROVED: frozenset({PaymentStatus.CANCELLED}),
    PaymentStatus.REJECTED: frozenset({PaymentStatus.PENDING, PaymentStatus.CANCELLED}),
    PaymentStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, nxt in STATUS_TRANSITIONS.items() if not nxt)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """A product reference and how many units of it were ordered."""

    product_id: str
    quantity: int


@dataclass
class Order:
    """Aggregate root for kiosk orders.

    Use the ``Order.create()`` factory for new orders.  ``__init__`` only
    checks the structural invariants so the repository can reconstitute
    persisted orders in any status.

    ``version`` is the storage concurrency token: repositories compare it
    on every status write and bump it on success.
    """

    id: str
    items: tuple[OrderItem, ...]
    customer_id: str | None = None
    tax_id: str | None = None
    status: OrderStatus = OrderStatus.RECEIVED
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None
    version: int = 0

    def __post_init__(self) -> None:
        self.items = tuple(self.items)
        if not self.items:
            raise InvalidOrderError("Order must have at least one item")
        for item in self.items:
            if isinstance(item.quantity, bool) or not isinstance(item.quantity, int):
                raise InvalidOrderError(
                    f"Quantity for product '{item.product_id}' must be an integer"
                )
            if item.quantity <= 0:
                raise InvalidOrderError(
                    f"Quantity for product '{item.product_id}' must be positive"
                )
        if self.customer_id and self.tax_id:
            raise InvalidOrderError(
                "An order references either a customer or a tax id, not both"
            )
        if self.updated_at is None:
            self.updated_at = self.created_at

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        items: list[OrderItem],
        customer_id: str | None = None,
        tax_id: str | None = None,
        order_id: str | None = None,
        now: datetime | None = None,
    ) -> Order:
        """Create a new order in RECEIVED / PENDING."""
        created = now or _utcnow()
        return Order(
            id=order_id or str(uuid4()),
            items=tuple(items),
            customer_id=customer_id or None,
            tax_id=tax_id or None,
            status=OrderStatus.RECEIVED,
            payment_status=PaymentStatus.PENDING,
            created_at=created,
            updated_at=created,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in STATUS_TRANSITIONS[self.status]

    def can_transition_payment_to(self, target: PaymentStatus) -> bool:
        return target in PAYMENT_TRANSITIONS[self.payment_status]

    def transition_status(self, target: OrderStatus) -> None:
        if not self.can_transition_to(target):
            raise IllegalStatusTransitionError(self.status, target)
        self.status = target
        self._touch()

    def transition_payment(self, target: PaymentStatus) -> None:
        if not self.can_transition_payment_to(target):
            raise IllegalPaymentTransitionError(self.payment_status, target)
        self.payment_status = target
        self._touch()

    # --- Queries --------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status != OrderStatus.FINISHED

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def is_payment_approved(self) -> bool:
        return self.payment_status == PaymentStatus.APPROVED

    @property
    def is_ready_for_pickup(self) -> bool:
        return self.status == OrderStatus.READY

    # --- Internal helpers -----------------------------------------------------

    def _touch(self) -> None:
        now = _utcnow()
        # Keep updated_at monotonic even when the clock is coarse.
        if self.updated_at is not None and now < self.updated_at:
            now = self.updated_at
        self.updated_at = now
