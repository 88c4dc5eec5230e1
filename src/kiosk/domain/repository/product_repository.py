"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from kiosk.domain.model.product import Product, ProductCategory


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_by_category(self, category: ProductCategory) -> list[Product]:
        """Return every product in ``category``."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product; False if it was not there."""
