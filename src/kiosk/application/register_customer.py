"""Application service: Register Customer use cases.

A kiosk customer identifies either with a CPF alone or with a name and
email.  Both identifiers are unique.
"""

from __future__ import annotations

from kiosk.application.dto import CustomerDTO
from kiosk.domain.exceptions import DuplicateCustomerError, ValidationError
from kiosk.domain.model.customer import Customer
from kiosk.domain.model.value_objects import TaxId
from kiosk.domain.repository.customer_repository import CustomerRepository


def to_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,
        name=customer.name,
        tax_id=customer.tax_id,
        email=customer.email,
    )


class RegisterCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def with_tax_id(self, raw_cpf: str) -> CustomerDTO:
        tax_id = TaxId.parse(raw_cpf)
        if self._customer_repo.get_by_tax_id(tax_id) is not None:
            raise DuplicateCustomerError("CPF already registered")

        customer = Customer.create(tax_id=tax_id)
        self._customer_repo.save(customer)
        return to_dto(customer)

    def with_email(self, name: str, email: str) -> CustomerDTO:
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        if not email or "@" not in email:
            raise ValidationError(f"Invalid email: {email!r}")
        if self._customer_repo.get_by_email(email.strip().lower()) is not None:
            raise DuplicateCustomerError("Email already registered")

        customer = Customer.create(name=name, email=email)
        self._customer_repo.save(customer)
        return to_dto(customer)
