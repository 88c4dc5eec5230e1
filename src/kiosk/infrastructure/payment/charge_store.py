"""Storage for the simulated provider's charges.

Injected into MockPaymentGateway so each process or test owns its own
set of charges.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from kiosk.domain.gateway.payment_gateway import Charge


class ChargeStore(ABC):

    @abstractmethod
    def get(self, payment_id: str) -> Charge | None:
        """Return a charge, or None."""

    @abstractmethod
    def save(self, charge: Charge) -> None:
        """Insert or replace a charge."""

    @abstractmethod
    def delete(self, payment_id: str) -> bool:
        """Remove a charge; False if it was not there."""

    @abstractmethod
    def list_all(self) -> list[Charge]:
        """Return every charge."""


class InMemoryChargeStore(ChargeStore):

    def __init__(self) -> None:
        self._charges: dict[str, Charge] = {}

    def get(self, payment_id: str) -> Charge | None:
        return self._charges.get(payment_id)

    def save(self, charge: Charge) -> None:
        self._charges[charge.id] = charge

    def delete(self, payment_id: str) -> bool:
        return self._charges.pop(payment_id, None) is not None

    def list_all(self) -> list[Charge]:
        return list(self._charges.values())
