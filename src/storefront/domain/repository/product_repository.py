"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (document store, in-memory
fakes) live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, active or not."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Insert a new product and assign its ID."""

    @abstractmethod
    def update_fields(self, product_id: str, **changes: Any) -> Product | None:
        """Write only the given fields of one product.

        Fields not named in *changes* keep whatever value the store holds
        at write time, so an edit never overwrites a concurrent stock
        decrement. Returns the updated product, or None if it is gone.
        """

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product. Return False if it did not exist."""

    @abstractmethod
    def conditional_decrement(self, product_id: str, quantity: int) -> int:
        """Atomically lower stock by *quantity* if stock >= *quantity*.

        Returns the number of products modified: 1 on success, 0 if the
        product is gone or no longer has enough stock at write time.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> int:
        """Atomically raise stock by *quantity*. Returns products modified."""
