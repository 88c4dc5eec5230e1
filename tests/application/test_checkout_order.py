"""Integration tests for the Checkout use case.

Uses in-memory fakes, no file I/O.
"""

from decimal import Decimal

import pytest

from kiosk.application.checkout_order import CheckoutOrderHandler
from kiosk.application.dto import OrderItemSpec
from kiosk.domain.exceptions import (
    CustomerNotFoundError,
    EmptyOrderError,
    InvalidOrderError,
    ProductNotFoundError,
)
from kiosk.domain.model.customer import Customer
from kiosk.domain.model.order import OrderStatus, PaymentStatus
from kiosk.domain.model.product import Product, ProductCategory
from kiosk.domain.model.value_objects import Money
from tests.fakes import (
    FakeCustomerRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeQueueRepository,
)


def _setup():
    """Build handler with fake repos pre-loaded with a small menu."""
    products = [
        Product("burger", "X-Burger", "Beef patty", Money.of("15.99"), ProductCategory.BURGER),
        Product("fries", "Fries", "Large", Money.of("7.50"), ProductCategory.SIDE_DISH),
    ]
    order_repo = FakeOrderRepository()
    customer_repo = FakeCustomerRepository([Customer(id="c-1", name="Ana", email="ana@example.com")])
    product_repo = FakeProductRepository(products)
    queue_repo = FakeQueueRepository()
    handler = CheckoutOrderHandler(order_repo, customer_repo, product_repo, queue_repo)
    return handler, order_repo, customer_repo, product_repo, queue_repo


class TestCheckoutHappyPath:

    def test_prices_lines_and_total(self):
        handler, *_ = _setup()
        result = handler.handle([OrderItemSpec("burger", 2)])
        assert result.total_amount == Decimal("31.98")
        assert result.items[0].price == Decimal("15.99")
        assert result.items[0].total == Decimal("31.98")

    def test_new_order_is_received_and_pending(self):
        handler, order_repo, *_ = _setup()
        result = handler.handle([OrderItemSpec("burger", 1), OrderItemSpec("fries", 2)])
        assert result.status == "RECEIVED"
        assert result.payment_status == "PENDING"
        saved = order_repo.get_by_id(result.order_id)
        assert saved.status == OrderStatus.RECEIVED
        assert saved.payment_status == PaymentStatus.PENDING
        assert [(i.product_id, i.quantity) for i in saved.items] == [("burger", 1), ("fries", 2)]

    def test_registers_in_queue(self):
        handler, _, _, _, queue_repo = _setup()
        result = handler.handle([OrderItemSpec("burger", 1)])
        entry = queue_repo.get_by_order_id(result.order_id)
        assert entry is not None
        assert entry.status == OrderStatus.RECEIVED

    def test_with_registered_customer(self):
        handler, order_repo, *_ = _setup()
        result = handler.handle([OrderItemSpec("burger", 1)], customer_id="c-1")
        assert order_repo.get_by_id(result.order_id).customer_id == "c-1"

    def test_with_cpf_normalized(self):
        handler, order_repo, *_ = _setup()
        result = handler.handle([OrderItemSpec("burger", 1)], tax_id="529.982.247-25")
        assert order_repo.get_by_id(result.order_id).tax_id == "52998224725"

    def test_price_is_not_frozen(self):
        handler, order_repo, _, product_repo, _ = _setup()
        result = handler.handle([OrderItemSpec("burger", 1)])
        burger = product_repo.get_by_id("burger")
        burger.update_price(Money.of("20.00"))
        product_repo.save(burger)
        # the order stores quantities only
        saved = order_repo.get_by_id(result.order_id)
        assert not hasattr(saved, "total")


class TestCheckoutRejections:

    def test_empty_cart_touches_no_store(self):
        handler, order_repo, customer_repo, product_repo, queue_repo = _setup()
        with pytest.raises(EmptyOrderError, match="Cannot complete order without items"):
            handler.handle([])
        assert order_repo.calls == []
        assert customer_repo.calls == []
        assert product_repo.calls == []
        assert queue_repo.calls == []

    def test_customer_and_cpf_together(self):
        handler, order_repo, *_ = _setup()
        with pytest.raises(InvalidOrderError, match="not both"):
            handler.handle([OrderItemSpec("burger", 1)], customer_id="c-1", tax_id="52998224725")
        assert order_repo.writes == []

    def test_unknown_customer(self):
        handler, order_repo, _, _, queue_repo = _setup()
        with pytest.raises(CustomerNotFoundError):
            handler.handle([OrderItemSpec("burger", 1)], customer_id="nobody")
        assert order_repo.writes == []
        assert queue_repo.calls == []

    def test_unknown_product(self):
        handler, order_repo, _, _, queue_repo = _setup()
        with pytest.raises(ProductNotFoundError, match="'ghost'"):
            handler.handle([OrderItemSpec("burger", 1), OrderItemSpec("ghost", 1)])
        assert order_repo.writes == []
        assert queue_repo.calls == []

    @pytest.mark.parametrize("qty", [0, -3])
    def test_bad_quantity(self, qty):
        handler, order_repo, *_ = _setup()
        with pytest.raises(InvalidOrderError):
            handler.handle([OrderItemSpec("burger", qty)])
        assert order_repo.writes == []


class TestCheckoutReplay:

    def test_same_request_id_returns_same_order(self):
        handler, order_repo, *_ = _setup()
        first = handler.handle([OrderItemSpec("burger", 2)], request_id="req-1")
        second = handler.handle([OrderItemSpec("burger", 2)], request_id="req-1")
        assert first.order_id == second.order_id == "req-1"
        assert not first.replayed
        assert second.replayed
        assert second.total_amount == Decimal("31.98")
        assert order_repo.calls.count("save") == 1

    def test_replay_finishes_queue_registration(self):
        handler, order_repo, _, _, queue_repo = _setup()
        handler.handle([OrderItemSpec("burger", 1)], request_id="req-2")
        # simulate a crash between the order write and the queue write
        queue_repo.delete("req-2")
        handler.handle([OrderItemSpec("burger", 1)], request_id="req-2")
        assert queue_repo.get_by_order_id("req-2") is not None
        assert len(order_repo.list_all()) == 1

    def test_replay_with_different_cart_rejected(self):
        handler, order_repo, _, _, queue_repo = _setup()
        handler.handle([OrderItemSpec("burger", 1)], request_id="req-3")
        with pytest.raises(InvalidOrderError, match="already used for a different order"):
            handler.handle([OrderItemSpec("fries", 1)], request_id="req-3")
        stored = order_repo.get_by_id("req-3")
        assert [(i.product_id, i.quantity) for i in stored.items] == [("burger", 1)]
        assert order_repo.calls.count("save") == 1
        assert len(queue_repo.list_all()) == 1

    def test_replay_with_different_quantity_rejected(self):
        handler, *_ = _setup()
        handler.handle([OrderItemSpec("burger", 1)], request_id="req-4")
        with pytest.raises(InvalidOrderError):
            handler.handle([OrderItemSpec("burger", 2)], request_id="req-4")

    def test_replay_with_different_customer_rejected(self):
        handler, order_repo, *_ = _setup()
        handler.handle([OrderItemSpec("burger", 1)], request_id="req-5")
        with pytest.raises(InvalidOrderError):
            handler.handle([OrderItemSpec("burger", 1)], customer_id="c-1", request_id="req-5")
        assert order_repo.get_by_id("req-5").customer_id is None

    def test_replay_matches_cpf_ignoring_punctuation(self):
        handler, *_ = _setup()
        handler.handle([OrderItemSpec("burger", 1)], tax_id="529.982.247-25", request_id="req-6")
        again = handler.handle(
            [OrderItemSpec("burger", 1)], tax_id="52998224725", request_id="req-6"
        )
        assert again.replayed
