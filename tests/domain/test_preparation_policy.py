"""Unit tests for the payment-before-preparation rule."""

import pytest

from kiosk.domain.exceptions import PaymentNotApprovedError
from kiosk.domain.model.order import Order, OrderItem, OrderStatus, PaymentStatus
from kiosk.domain.service.preparation_policy import PaymentApprovedPolicy


def _order(payment_status: PaymentStatus) -> Order:
    return Order(id="o-1", items=(OrderItem("burger", 1),), payment_status=payment_status)


class TestPaymentApprovedPolicy:

    def test_approved_order_may_enter_preparation(self):
        PaymentApprovedPolicy().check(_order(PaymentStatus.APPROVED), OrderStatus.IN_PREPARATION)

    @pytest.mark.parametrize(
        "payment_status",
        [PaymentStatus.PENDING, PaymentStatus.REJECTED, PaymentStatus.CANCELLED],
    )
    def test_unpaid_order_refused(self, payment_status):
        with pytest.raises(PaymentNotApprovedError, match="expected APPROVED") as info:
            PaymentApprovedPolicy().check(_order(payment_status), OrderStatus.IN_PREPARATION)
        assert info.value.payment_status == payment_status

    @pytest.mark.parametrize(
        "target",
        [OrderStatus.CANCELLED, OrderStatus.READY, OrderStatus.FINISHED],
    )
    def test_other_targets_are_not_gated(self, target):
        PaymentApprovedPolicy().check(_order(PaymentStatus.PENDING), target)
