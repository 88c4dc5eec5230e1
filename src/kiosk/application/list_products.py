"""Application service: List Products use case (query)."""

from __future__ import annotations

from kiosk.domain.model.product import Product, ProductCategory
from kiosk.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, category: str | None = None) -> list[Product]:
        if category is None:
            products = self._product_repo.list_all()
        else:
            products = self._product_repo.list_by_category(ProductCategory.parse(category))
        return sorted(products, key=lambda p: (p.category.value, p.name.lower()))
