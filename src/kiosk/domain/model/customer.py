"""Customer entity.

Customers are optional: an anonymous checkout carries no customer at all.
Once registered a customer is never updated by the ordering core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from kiosk.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Customer:

    id: str
    name: str | None = None
    tax_id: str | None = None
    email: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str | None = None,
        tax_id: str | None = None,
        email: str | None = None,
    ) -> Customer:
        if not tax_id and not email:
            raise ValidationError("A customer needs a CPF or an email")
        now = datetime.now(timezone.utc)
        return Customer(
            id=str(uuid4()),
            name=name.strip() if name else None,
            tax_id=tax_id,
            email=email.strip().lower() if email else None,
            created_at=now,
            updated_at=now,
        )
