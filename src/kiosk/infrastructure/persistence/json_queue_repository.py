"""JSON-file-backed implementation of QueueRepository.

Create-if-absent and status mirroring run under the shared file lock.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from kiosk.domain.exceptions import QueueEntryNotFoundError
from kiosk.domain.model.order import OrderStatus
from kiosk.domain.model.queue_entry import QueueEntry
from kiosk.domain.repository.queue_repository import QueueRepository
from kiosk.infrastructure.persistence.json_file import JsonFile


class JsonQueueRepository(QueueRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- QueueRepository interface --------------------------------------------

    def create(self, entry: QueueEntry) -> QueueEntry:
        with self._file.lock:
            records = self._load_raw()
            for raw in records:
                if raw["order_id"] == entry.order_id:
                    return self._to_domain(raw)
            records.append(self._to_raw(entry))
            self._persist_raw(records)
            return entry

    def get_by_order_id(self, order_id: str) -> QueueEntry | None:
        for raw in self._load_raw():
            if raw["order_id"] == order_id:
                return self._to_domain(raw)
        return None

    def update_status(self, order_id: str, status: OrderStatus) -> QueueEntry:
        with self._file.lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["order_id"] == order_id:
                    entry = self._to_domain(raw)
                    entry.mirror(status)
                    records[i] = self._to_raw(entry)
                    self._persist_raw(records)
                    return entry
        raise QueueEntryNotFoundError(order_id)

    def list_by_status(self, status: OrderStatus) -> list[QueueEntry]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["status"] == status.value
        ]

    def list_all(self) -> list[QueueEntry]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def delete(self, order_id: str) -> bool:
        with self._file.lock:
            records = self._load_raw()
            kept = [raw for raw in records if raw["order_id"] != order_id]
            if len(kept) == len(records):
                return False
            self._persist_raw(kept)
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: QueueEntry) -> dict:
        return {
            "id": entry.id,
            "order_id": entry.order_id,
            "status": entry.status.value,
            "created_at": entry.created_at.isoformat(),
            "updated_at": entry.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> QueueEntry:
        return QueueEntry(
            id=raw["id"],
            order_id=raw["order_id"],
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return self._file.read()

    def _persist_raw(self, records: list[dict]) -> None:
        self._file.write(records)
