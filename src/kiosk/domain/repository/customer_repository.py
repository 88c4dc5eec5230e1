"""Abstract repository for Customer entity."""

from __future__ import annotations

from abc import ABC, abstractmethod

from kiosk.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by ID, or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> Customer | None:
        """Return the customer registered with ``email``, or None."""

    @abstractmethod
    def get_by_tax_id(self, tax_id: str) -> Customer | None:
        """Return the customer registered with a normalized CPF, or None."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new customer."""
