"""JSON-file-backed implementation of OrderRepository.

Status writes are compare-and-set on the ``version`` field, performed
under the file lock shared by every instance and process, so two writers
cannot both pass the version check against the same stored version.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from kiosk.domain.exceptions import (
    ConcurrencyConflictError,
    OrderNotFoundError,
)
from kiosk.domain.model.order import Order, OrderItem, OrderStatus, PaymentStatus
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        with self._file.lock:
            orders = self._load_raw()
            for raw in orders:
                if raw["id"] == order.id:
                    # Lost a race with a checkout retried under the same id.
                    raise ConcurrencyConflictError(order.id, order.version, raw.get("version", 0))
            orders.append(self._to_raw(order))
            self._persist_raw(orders)

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["status"] == status.value
        ]

    def list_by_customer(self, customer_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw.get("customer_id") == customer_id
        ]

    def update_status(self, order: Order) -> None:
        self._compare_and_set(order, status=order.status.value)

    def update_payment_status(self, order: Order) -> None:
        self._compare_and_set(order, payment_status=order.payment_status.value)

    # --- Concurrency ----------------------------------------------------------

    def _compare_and_set(self, order: Order, **fields: str) -> None:
        with self._file.lock:
            orders = self._load_raw()
            for raw in orders:
                if raw["id"] != order.id:
                    continue
                stored_version = raw.get("version", 0)
                if stored_version != order.version:
                    raise ConcurrencyConflictError(order.id, order.version, stored_version)
                raw.update(fields)
                raw["updated_at"] = order.updated_at.isoformat()  # type: ignore[union-attr]
                raw["version"] = stored_version + 1
                self._persist_raw(orders)
                order.version = stored_version + 1
                return
        raise OrderNotFoundError(order.id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "tax_id": order.tax_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),  # type: ignore[union-attr]
            "version": order.version,
            "items": [
                {"product_id": item.product_id, "quantity": item.quantity}
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            items=tuple(
                OrderItem(product_id=i["product_id"], quantity=i["quantity"])
                for i in raw["items"]
            ),
            customer_id=raw.get("customer_id"),
            tax_id=raw.get("tax_id"),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return self._file.read()

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file.write(orders)
