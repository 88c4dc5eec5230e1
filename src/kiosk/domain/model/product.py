"""Product aggregate.

Products live independently of orders. Orders only reference them by id,
so a price change shows up in every total computed afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kiosk.domain.exceptions import ValidationError
from kiosk.domain.model.value_objects import Money


class ProductCategory(Enum):
    BURGER = "BURGER"
    SIDE_DISH = "SIDE_DISH"
    BEVERAGE = "BEVERAGE"
    DESSERT = "DESSERT"

    @classmethod
    def parse(cls, raw: str) -> ProductCategory:
        try:
            return cls(raw.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown product category: {raw!r}") from exc


@dataclass
class Product:
    """A product in the catalog."""

    id: str
    name: str
    description: str
    price: Money
    category: ProductCategory
    image_url: str | None = None

    def update_price(self, new_price: Money) -> None:
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name is required")
        self.name = new_name.strip()
