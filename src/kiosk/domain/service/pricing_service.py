"""Domain service: Pricing.

Orders never store prices, so every total in the system (checkout
receipt, kitchen queue, simulated charge) is computed here from the
catalog as it stands at the moment of the call.

All products are resolved before any total is returned: a single
missing product fails the whole computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from kiosk.domain.exceptions import ProductNotFoundError
from kiosk.domain.model.order import OrderItem
from kiosk.domain.model.product import Product
from kiosk.domain.model.value_objects import Money
from kiosk.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class PricedLine:
    product: Product
    quantity: int

    @property
    def unit_price(self) -> Money:
        return self.product.price

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity


class PricingService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def price(self, items: Iterable[OrderItem]) -> list[PricedLine]:
        lines: list[PricedLine] = []
        for item in items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise ProductNotFoundError(item.product_id)
            lines.append(PricedLine(product=product, quantity=item.quantity))
        return lines

    @staticmethod
    def total(lines: Iterable[PricedLine]) -> Money:
        result = Money.zero()
        for line in lines:
            result = result + line.line_total
        return result
