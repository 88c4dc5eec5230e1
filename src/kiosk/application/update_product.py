"""Application service: Update Product use case.

Only the fields passed in change; the product keeps its id, so orders
that reference it pick up the new details (and price) on their next read.
"""

from __future__ import annotations

import logging

from kiosk.domain.exceptions import ProductNotFoundError, ValidationError
from kiosk.domain.model.product import Product, ProductCategory
from kiosk.domain.model.value_objects import Money
from kiosk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        price: str | None = None,
        name: str | None = None,
        description: str | None = None,
        category: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        if all(v is None for v in (price, name, description, category, image_url)):
            raise ValidationError("Nothing to update")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        # Validate everything before touching the product.
        new_price = Money.of(price) if price is not None else None
        new_category = ProductCategory.parse(category) if category is not None else None

        if new_price is not None:
            product.update_price(new_price)
        if name is not None:
            product.rename(name)
        if description is not None:
            product.description = description.strip()
        if new_category is not None:
            product.category = new_category
        if image_url is not None:
            product.image_url = image_url or None

        self._product_repo.save(product)
        logger.info("product %s updated", product.id)
        return product
