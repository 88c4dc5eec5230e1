"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
and the payment adapters but keep everything in dicts. No file I/O, no
network. Every fake records the calls it receives so tests can assert
that nothing was touched.

Stored objects are copied on the way in and out, like a real store would
re-read them, so a test cannot pass by mutating a shared instance.
"""

from __future__ import annotations

from copy import deepcopy
from decimal import Decimal

from kiosk.domain.exceptions import (
    ConcurrencyConflictError,
    OrderNotFoundError,
    PaymentProviderError,
    QueueEntryNotFoundError,
)
from kiosk.domain.gateway.payment_gateway import (
    PaymentGateway,
    ProviderMerchantOrder,
    ProviderPayment,
    QRCodeOrder,
)
from kiosk.domain.model.customer import Customer
from kiosk.domain.model.order import Order, OrderStatus
from kiosk.domain.model.product import Product, ProductCategory
from kiosk.domain.model.queue_entry import QueueEntry
from kiosk.domain.repository.customer_repository import CustomerRepository
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.repository.product_repository import ProductRepository
from kiosk.domain.repository.queue_repository import QueueRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        self.calls: list[str] = []
        for o in orders or []:
            self._store[o.id] = deepcopy(o)

    def get_by_id(self, order_id: str) -> Order | None:
        self.calls.append("get_by_id")
        order = self._store.get(order_id)
        return deepcopy(order) if order is not None else None

    def save(self, order: Order) -> None:
        self.calls.append("save")
        if order.id in self._store:
            raise ConcurrencyConflictError(order.id, order.version, self._store[order.id].version)
        self._store[order.id] = deepcopy(order)

    def list_all(self) -> list[Order]:
        self.calls.append("list_all")
        return [deepcopy(o) for o in self._store.values()]

    def list_by_status(self, status: OrderStatus) -> list[Order]:
        self.calls.append("list_by_status")
        return [deepcopy(o) for o in self._store.values() if o.status == status]

    def list_by_customer(self, customer_id: str) -> list[Order]:
        self.calls.append("list_by_customer")
        return [deepcopy(o) for o in self._store.values() if o.customer_id == customer_id]

    def update_status(self, order: Order) -> None:
        self.calls.append("update_status")
        self._compare_and_set(order)

    def update_payment_status(self, order: Order) -> None:
        self.calls.append("update_payment_status")
        self._compare_and_set(order)

    def _compare_and_set(self, order: Order) -> None:
        stored = self._store.get(order.id)
        if stored is None:
            raise OrderNotFoundError(order.id)
        if stored.version != order.version:
            raise ConcurrencyConflictError(order.id, order.version, stored.version)
        order.version += 1
        self._store[order.id] = deepcopy(order)

    @property
    def writes(self) -> list[str]:
        return [c for c in self.calls if c in ("save", "update_status", "update_payment_status")]


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self.calls: list[str] = []
        for p in products or []:
            self._store[p.id] = deepcopy(p)

    def get_by_id(self, product_id: str) -> Product | None:
        self.calls.append("get_by_id")
        product = self._store.get(product_id)
        return deepcopy(product) if product is not None else None

    def list_by_category(self, category: ProductCategory) -> list[Product]:
        self.calls.append("list_by_category")
        return [deepcopy(p) for p in self._store.values() if p.category == category]

    def list_all(self) -> list[Product]:
        self.calls.append("list_all")
        return [deepcopy(p) for p in self._store.values()]

    def save(self, product: Product) -> None:
        self.calls.append("save")
        self._store[product.id] = deepcopy(product)

    def delete(self, product_id: str) -> bool:
        self.calls.append("delete")
        return self._store.pop(product_id, None) is not None


class FakeCustomerRepository(CustomerRepository):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._store: dict[str, Customer] = {}
        self.calls: list[str] = []
        for c in customers or []:
            self._store[c.id] = c

    def get_by_id(self, customer_id: str) -> Customer | None:
        self.calls.append("get_by_id")
        return self._store.get(customer_id)

    def get_by_email(self, email: str) -> Customer | None:
        self.calls.append("get_by_email")
        for c in self._store.values():
            if c.email == email:
                return c
        return None

    def get_by_tax_id(self, tax_id: str) -> Customer | None:
        self.calls.append("get_by_tax_id")
        for c in self._store.values():
            if c.tax_id == tax_id:
                return c
        return None

    def save(self, customer: Customer) -> None:
        self.calls.append("save")
        self._store[customer.id] = customer


class FakeQueueRepository(QueueRepository):

    def __init__(self, entries: list[QueueEntry] | None = None) -> None:
        self._store: dict[str, QueueEntry] = {}
        self.calls: list[str] = []
        for e in entries or []:
            self._store[e.order_id] = deepcopy(e)

    def create(self, entry: QueueEntry) -> QueueEntry:
        self.calls.append("create")
        existing = self._store.get(entry.order_id)
        if existing is not None:
            return deepcopy(existing)
        self._store[entry.order_id] = deepcopy(entry)
        return deepcopy(entry)

    def get_by_order_id(self, order_id: str) -> QueueEntry | None:
        self.calls.append("get_by_order_id")
        entry = self._store.get(order_id)
        return deepcopy(entry) if entry is not None else None

    def update_status(self, order_id: str, status: OrderStatus) -> QueueEntry:
        self.calls.append("update_status")
        entry = self._store.get(order_id)
        if entry is None:
            raise QueueEntryNotFoundError(order_id)
        entry.mirror(status)
        return deepcopy(entry)

    def list_by_status(self, status: OrderStatus) -> list[QueueEntry]:
        self.calls.append("list_by_status")
        return [deepcopy(e) for e in self._store.values() if e.status == status]

    def list_all(self) -> list[QueueEntry]:
        self.calls.append("list_all")
        return [deepcopy(e) for e in self._store.values()]

    def delete(self, order_id: str) -> bool:
        self.calls.append("delete")
        return self._store.pop(order_id, None) is not None


class FakePaymentGateway(PaymentGateway):
    """Provider double answering from canned records."""

    def __init__(
        self,
        payments: list[ProviderPayment] | None = None,
        merchant_orders: list[ProviderMerchantOrder] | None = None,
        signature_ok: bool = True,
    ) -> None:
        self.payments = {p.id: p for p in payments or []}
        self.merchant_orders = {m.id: m for m in merchant_orders or []}
        self.signature_ok = signature_ok
        self.calls: list[tuple[str, str]] = []
        self.qr_orders: list[tuple[str, Decimal, str, str | None]] = []

    def create_qr_order(
        self,
        order_id: str,
        amount: Decimal,
        description: str,
        notification_url: str | None = None,
    ) -> QRCodeOrder:
        self.calls.append(("create_qr_order", order_id))
        self.qr_orders.append((order_id, amount, description, notification_url))
        return QRCodeOrder(
            external_reference=order_id,
            qr_data=f"qr-{order_id}",
            notification_url=notification_url,
        )

    def fetch_payment_by_id(self, payment_id: str) -> ProviderPayment:
        self.calls.append(("fetch_payment_by_id", payment_id))
        if payment_id not in self.payments:
            raise PaymentProviderError(f"payment {payment_id} not found")
        return self.payments[payment_id]

    def fetch_merchant_order_by_id(self, merchant_order_id: str) -> ProviderMerchantOrder:
        self.calls.append(("fetch_merchant_order_by_id", merchant_order_id))
        if merchant_order_id not in self.merchant_orders:
            raise PaymentProviderError(f"merchant order {merchant_order_id} not found")
        return self.merchant_orders[merchant_order_id]

    def validate_signature(self, payload: bytes, signature: str) -> bool:
        self.calls.append(("validate_signature", signature))
        return self.signature_ok


def make_payment(
    payment_id: str,
    order_id: str | None,
    status: str = "approved",
    amount: str = "10.00",
) -> ProviderPayment:
    return ProviderPayment(
        id=payment_id,
        status=status,
        external_reference=order_id,
        transaction_amount=Decimal(amount),
    )
