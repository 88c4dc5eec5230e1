"""Application service: Add Product use case."""

from __future__ import annotations

from uuid import uuid4

from kiosk.domain.exceptions import ValidationError
from kiosk.domain.model.product import Product, ProductCategory
from kiosk.domain.model.value_objects import Money
from kiosk.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        description: str,
        price: str,
        category: str,
        image_url: str | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        product_category = ProductCategory.parse(category)

        amount = Money.of(price)
        if amount.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id=str(uuid4()),
            name=name.strip(),
            description=(description or "").strip(),
            price=amount,
            category=product_category,
            image_url=image_url or None,
        )
        self._product_repo.save(product)
        return product
