"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from kiosk.domain.model.customer import Customer
from kiosk.domain.repository.customer_repository import CustomerRepository
from kiosk.infrastructure.persistence.json_file import JsonFile


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CustomerRepository interface -----------------------------------------

    def get_by_id(self, customer_id: str) -> Customer | None:
        return self._find(lambda raw: raw["id"] == customer_id)

    def get_by_email(self, email: str) -> Customer | None:
        return self._find(lambda raw: raw.get("email") == email)

    def get_by_tax_id(self, tax_id: str) -> Customer | None:
        return self._find(lambda raw: raw.get("tax_id") == tax_id)

    def save(self, customer: Customer) -> None:
        with self._file.lock:
            records = [r for r in self._load_raw() if r["id"] != customer.id]
            records.append(self._to_raw(customer))
            self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    def _find(self, predicate) -> Customer | None:
        for raw in self._load_raw():
            if predicate(raw):
                return self._to_domain(raw)
        return None

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "name": customer.name,
            "tax_id": customer.tax_id,
            "email": customer.email,
            "created_at": customer.created_at.isoformat(),
            "updated_at": customer.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw.get("name"),
            tax_id=raw.get("tax_id"),
            email=raw.get("email"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return self._file.read()

    def _persist_raw(self, records: list[dict]) -> None:
        self._file.write(records)
