"""JSON-file-backed ChargeStore, so simulated charges survive between CLI runs."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from kiosk.domain.gateway.payment_gateway import Charge
from kiosk.infrastructure.payment.charge_store import ChargeStore
from kiosk.infrastructure.persistence.json_file import JsonFile


class JsonChargeStore(ChargeStore):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get(self, payment_id: str) -> Charge | None:
        return self._load().get(payment_id)

    def save(self, charge: Charge) -> None:
        with self._file.lock:
            charges = self._load()
            charges[charge.id] = charge
            self._persist(charges)

    def delete(self, payment_id: str) -> bool:
        with self._file.lock:
            charges = self._load()
            if charges.pop(payment_id, None) is None:
                return False
            self._persist(charges)
            return True

    def list_all(self) -> list[Charge]:
        return list(self._load().values())

    def _load(self) -> dict[str, Charge]:
        charges = {}
        for item in self._file.read():
            # Charges written before created_at was recorded count as new.
            created_at = (
                datetime.fromisoformat(item["created_at"])
                if "created_at" in item
                else datetime.now(timezone.utc)
            )
            charges[item["id"]] = Charge(
                id=item["id"],
                order_id=item["order_id"],
                amount=Decimal(item["amount"]),
                status=item["status"],
                created_at=created_at,
            )
        return charges

    def _persist(self, charges: dict[str, Charge]) -> None:
        self._file.write([
            {
                "id": c.id,
                "order_id": c.order_id,
                "amount": str(c.amount),
                "status": c.status,
                "created_at": c.created_at.isoformat(),
            }
            for c in charges.values()
        ])
