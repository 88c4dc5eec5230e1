"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from kiosk.domain.model.product import Product, ProductCategory
from kiosk.domain.model.value_objects import Money
from kiosk.domain.repository.product_repository import ProductRepository
from kiosk.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_by_category(self, category: ProductCategory) -> list[Product]:
        return [p for p in self._load().values() if p.category == category]

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._file.lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def delete(self, product_id: str) -> bool:
        with self._file.lock:
            products = self._load()
            if products.pop(product_id, None) is None:
                return False
            self._persist(products)
            return True

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                description=item.get("description", ""),
                price=Money(Decimal(item["price"])),
                category=ProductCategory(item["category"]),
                image_url=item.get("image_url"),
            )
            for item in self._file.read()
        }

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.write([
            {
                "id": p.id,
                "name": p.name,
                "description": p.description,
                "price": str(p.price.amount),
                "category": p.category.value,
                "image_url": p.image_url,
            }
            for p in products.values()
        ])
