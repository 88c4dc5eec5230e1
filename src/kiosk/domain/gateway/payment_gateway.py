"""Payment provider ports.

The webhook reconciler only ever talks to ``PaymentGateway``; whether the
other side is Mercado Pago or the in-process simulator is decided in the
composition root.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal


@dataclass(frozen=True)
class ProviderPayment:
    """A payment as reported by the provider, in its own vocabulary."""

    id: str
    status: str
    external_reference: str | None
    transaction_amount: Decimal = Decimal("0")
    status_detail: str | None = None


@dataclass(frozen=True)
class ProviderMerchantOrder:

    id: str
    status: str
    external_reference: str | None
    total_amount: Decimal
    paid_amount: Decimal

    @property
    def is_fully_paid(self) -> bool:
        return self.status == "closed" and self.paid_amount >= self.total_amount


@dataclass(frozen=True)
class Charge:
    """A charge opened at the simulated provider."""

    id: str
    order_id: str
    amount: Decimal
    status: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class QRCodeOrder:
    """A payment order the customer settles by scanning a QR code."""

    external_reference: str
    qr_data: str
    qr_code_base64: str | None = None
    notification_url: str | None = None
    # Known up front only at the simulated provider.
    payment_id: str | None = None


class PaymentGateway(ABC):

    @abstractmethod
    def create_qr_order(
        self,
        order_id: str,
        amount: Decimal,
        description: str,
        notification_url: str | None = None,
    ) -> QRCodeOrder:
        """Open a QR payment order whose external reference is ``order_id``."""

    @abstractmethod
    def fetch_payment_by_id(self, payment_id: str) -> ProviderPayment:
        """Look up a payment; raises PaymentProviderError on failure."""

    @abstractmethod
    def fetch_merchant_order_by_id(self, merchant_order_id: str) -> ProviderMerchantOrder:
        """Look up a merchant order; raises PaymentProviderError on failure."""

    @abstractmethod
    def validate_signature(self, payload: bytes, signature: str) -> bool:
        """Check a webhook signature against the raw request body."""


class SimulatedPaymentGateway(PaymentGateway):
    """A provider whose charges can be settled by hand."""

    @abstractmethod
    def create_charge(self, order_id: str, amount: Decimal) -> Charge:
        """Open a pending charge referencing ``order_id``."""

    @abstractmethod
    def set_charge_status(self, payment_id: str, status: str) -> Charge:
        """Move a charge to a provider-vocabulary status."""

    @abstractmethod
    def list_charges(self) -> list[Charge]:
        """Return every charge the simulator knows about."""

    @abstractmethod
    def clear_charges_older_than(self, age: timedelta) -> int:
        """Forget charges created more than ``age`` ago; returns how many."""
