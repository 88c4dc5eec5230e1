"""Application service: Find Customer use case (query)."""

from __future__ import annotations

from kiosk.application.dto import CustomerDTO
from kiosk.application.register_customer import to_dto
from kiosk.domain.exceptions import CustomerNotFoundError
from kiosk.domain.model.value_objects import TaxId
from kiosk.domain.repository.customer_repository import CustomerRepository


class FindCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def by_id(self, customer_id: str) -> CustomerDTO:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return to_dto(customer)

    def by_email(self, email: str) -> CustomerDTO:
        customer = self._customer_repo.get_by_email(email.strip().lower())
        if customer is None:
            raise CustomerNotFoundError(email)
        return to_dto(customer)

    def by_tax_id(self, raw_cpf: str) -> CustomerDTO:
        tax_id = TaxId.parse(raw_cpf)
        customer = self._customer_repo.get_by_tax_id(tax_id)
        if customer is None:
            raise CustomerNotFoundError(tax_id)
        return to_dto(customer)
