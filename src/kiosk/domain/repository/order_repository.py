"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from kiosk.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a brand-new order."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def list_by_status(self, status: OrderStatus) -> list[Order]:
        """Return orders currently in ``status``."""

    @abstractmethod
    def list_by_customer(self, customer_id: str) -> list[Order]:
        """Return orders placed by a registered customer."""

    @abstractmethod
    def update_status(self, order: Order) -> None:
        """Write ``order.status`` if the stored version still matches.

        Bumps ``order.version`` on success; raises
        ConcurrencyConflictError when another writer got there first.
        """

    @abstractmethod
    def update_payment_status(self, order: Order) -> None:
        """Write ``order.payment_status`` under the same version check."""
