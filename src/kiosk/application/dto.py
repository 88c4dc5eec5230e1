"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Statuses travel as
their string values; money travels as Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from kiosk.domain.model.order import Order
from kiosk.domain.model.queue_entry import QueueEntry
from kiosk.domain.service.pricing_service import PricedLine


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class PricedItemDTO:
    """Output: a line as priced against the current catalog."""

    product_id: str
    quantity: int
    price: Decimal
    total: Decimal

    @staticmethod
    def from_line(line: PricedLine) -> PricedItemDTO:
        return PricedItemDTO(
            product_id=line.product.id,
            quantity=line.quantity,
            price=line.unit_price.amount,
            total=line.line_total.amount,
        )


@dataclass(frozen=True)
class CheckoutResultDTO:
    order_id: str
    status: str
    payment_status: str
    items: list[PricedItemDTO]
    total_amount: Decimal
    replayed: bool = False


@dataclass(frozen=True)
class DetailedItemDTO:
    """Output: a line joined with product details for display."""

    product_id: str
    product_name: str
    product_description: str
    quantity: int
    price: Decimal
    total: Decimal

    @staticmethod
    def from_line(line: PricedLine) -> DetailedItemDTO:
        return DetailedItemDTO(
            product_id=line.product.id,
            product_name=line.product.name,
            product_description=line.product.description,
            quantity=line.quantity,
            price=line.unit_price.amount,
            total=line.line_total.amount,
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order with items priced at read time."""

    id: str
    customer_id: str | None
    tax_id: str | None
    status: str
    payment_status: str
    items: list[DetailedItemDTO]
    total_amount: Decimal
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def build(order: Order, lines: list[PricedLine], total: Decimal) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            customer_id=order.customer_id,
            tax_id=order.tax_id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            items=[DetailedItemDTO.from_line(line) for line in lines],
            total_amount=total,
            created_at=order.created_at,
            updated_at=order.updated_at,  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: an order without pricing, for plain listings."""

    id: str
    customer_id: str | None
    status: str
    payment_status: str
    item_count: int
    created_at: datetime

    @staticmethod
    def from_order(order: Order) -> OrderSummaryDTO:
        return OrderSummaryDTO(
            id=order.id,
            customer_id=order.customer_id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            item_count=sum(item.quantity for item in order.items),
            created_at=order.created_at,
        )


@dataclass(frozen=True)
class QueueEntryDTO:
    id: str
    order_id: str
    status: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_entry(entry: QueueEntry) -> QueueEntryDTO:
        return QueueEntryDTO(
            id=entry.id,
            order_id=entry.order_id,
            status=entry.status.value,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


@dataclass(frozen=True)
class PaymentStatusDTO:
    order_id: str
    payment_status: str
    is_approved: bool


@dataclass(frozen=True)
class WebhookOutcomeDTO:
    """Output: what a webhook delivery did to the referenced order."""

    notification_type: str
    resource_id: str
    order_id: str | None
    payment_status: str | None
    applied: bool


@dataclass(frozen=True)
class ChargeDTO:
    payment_id: str
    order_id: str
    amount: Decimal
    status: str


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str | None
    tax_id: str | None
    email: str | None


@dataclass(frozen=True)
class PaymentQRCodeDTO:
    """Output: what the kiosk shows the customer to pay with."""

    order_id: str
    amount: Decimal
    qr_data: str
    qr_code_base64: str | None
    notification_url: str | None
    payment_id: str | None = None
