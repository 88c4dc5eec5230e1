"""Abstract repository for the kitchen queue index."""

from __future__ import annotations

from abc import ABC, abstractmethod

from kiosk.domain.model.order import OrderStatus
from kiosk.domain.model.queue_entry import QueueEntry


class QueueRepository(ABC):

    @abstractmethod
    def create(self, entry: QueueEntry) -> QueueEntry:
        """Store ``entry`` unless one already exists for its order.

        Returns the stored entry, which is the existing one on a repeat
        call.  This keeps checkout retries from duplicating queue rows.
        """

    @abstractmethod
    def get_by_order_id(self, order_id: str) -> QueueEntry | None:
        """Return the entry for an order, or None."""

    @abstractmethod
    def update_status(self, order_id: str, status: OrderStatus) -> QueueEntry:
        """Mirror a new order status; raises EntityNotFoundError if absent."""

    @abstractmethod
    def list_by_status(self, status: OrderStatus) -> list[QueueEntry]:
        """Return entries mirroring ``status``."""

    @abstractmethod
    def list_all(self) -> list[QueueEntry]:
        """Return every entry."""

    @abstractmethod
    def delete(self, order_id: str) -> bool:
        """Drop the entry for an order. Returns False if there was none."""
