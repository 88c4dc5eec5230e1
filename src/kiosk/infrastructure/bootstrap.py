"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from kiosk.application.checkout_order import CheckoutOrderHandler
from kiosk.application.order_queue import OrderQueueService
from kiosk.application.reconcile_webhook import WebhookReconciler
from kiosk.application.simulate_payment import SimulatePaymentHandler
from kiosk.application.start_payment import StartPaymentHandler
from kiosk.application.update_payment_status import UpdatePaymentStatusHandler
from kiosk.domain.exceptions import ValidationError
from kiosk.domain.gateway.payment_gateway import PaymentGateway
from kiosk.infrastructure.config import get_settings
from kiosk.infrastructure.payment.mercado_pago import MercadoPagoGateway
from kiosk.infrastructure.payment.mock_gateway import MockPaymentGateway
from kiosk.infrastructure.persistence.json_charge_store import JsonChargeStore
from kiosk.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from kiosk.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from kiosk.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from kiosk.infrastructure.persistence.json_queue_repository import (
    JsonQueueRepository,
)


def customer_repository() -> JsonCustomerRepository:
    return JsonCustomerRepository(get_settings().data_dir / "customers.json")


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


def queue_repository() -> JsonQueueRepository:
    return JsonQueueRepository(get_settings().data_dir / "order_queue.json")


def mock_gateway() -> MockPaymentGateway:
    settings = get_settings()
    return MockPaymentGateway(
        JsonChargeStore(settings.data_dir / "charges.json"),
        webhook_secret=settings.webhook_secret,
    )


def payment_gateway() -> PaymentGateway:
    settings = get_settings()
    if settings.payment_provider == "mercadopago":
        return MercadoPagoGateway(settings)
    return mock_gateway()


def checkout_handler() -> CheckoutOrderHandler:
    return CheckoutOrderHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
        product_repo=product_repository(),
        queue_repo=queue_repository(),
        payment_delay=get_settings().checkout_payment_delay_seconds,
    )


def order_queue_service() -> OrderQueueService:
    return OrderQueueService(
        order_repo=order_repository(),
        product_repo=product_repository(),
        queue_repo=queue_repository(),
    )


def webhook_reconciler(gateway: PaymentGateway | None = None) -> WebhookReconciler:
    return WebhookReconciler(
        gateway=gateway or payment_gateway(),
        payment_updater=UpdatePaymentStatusHandler(order_repository()),
    )


def start_payment_handler() -> StartPaymentHandler:
    return StartPaymentHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        gateway=payment_gateway(),
        notification_url=get_settings().notification_url,
    )


def simulate_payment_handler() -> SimulatePaymentHandler:
    if get_settings().payment_provider != "mock":
        raise ValidationError("Simulated payments need KIOSK_PAYMENT_PROVIDER=mock")
    gateway = mock_gateway()
    return SimulatePaymentHandler(
        gateway=gateway,
        reconciler=webhook_reconciler(gateway),
    )
