"""Domain service: Preparation policy.

The kitchen must not start on an order nobody has paid for.  This is a
workflow rule spanning the two state machines, so it lives beside the
Order aggregate instead of inside it: the aggregate stays a pure
legality table and the rule can change on its own.
"""

from __future__ import annotations

from kiosk.domain.exceptions import PaymentNotApprovedError
from kiosk.domain.model.order import Order, OrderStatus


class PaymentApprovedPolicy:

    def check(self, order: Order, target: OrderStatus) -> None:
        """Raise PaymentNotApprovedError if ``target`` needs a settled payment."""
        if target == OrderStatus.IN_PREPARATION and not order.is_payment_approved:
            raise PaymentNotApprovedError(order.id, order.payment_status)

