"""Document-store-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from storefront.domain.model.product import Product, ProductCategory
from storefront.domain.model.value_objects import DiscountPercentage, Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.document_store import Document, DocumentStore

COLLECTION = "products"

EDITABLE_FIELDS = frozenset({
    "name", "price", "discount", "stock_quantity", "is_active",
    "category", "description", "image", "sizes", "colors",
})


class DocumentProductRepository(ProductRepository):

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._store.find_one(COLLECTION, product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._store.find(COLLECTION)]

    def add(self, product: Product) -> Product:
        raw = self._store.insert_one(COLLECTION, self._to_raw(product))
        product.id = raw["id"]
        return product

    def update_fields(self, product_id: str, **changes: Any) -> Product | None:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update product field(s): {', '.join(sorted(unknown))}")
        raw = self._store.update_one(
            COLLECTION, product_id, set_fields=self._fields_to_raw(changes)
        )
        return self._to_domain(raw) if raw is not None else None

    def delete(self, product_id: str) -> bool:
        return self._store.delete_one(COLLECTION, product_id) == 1

    def conditional_decrement(self, product_id: str, quantity: int) -> int:
        updated = self._store.update_one(
            COLLECTION,
            product_id,
            where=lambda doc: doc["stock_quantity"] >= quantity,
            inc={"stock_quantity": -quantity},
        )
        return 0 if updated is None else 1

    def increment_stock(self, product_id: str, quantity: int) -> int:
        updated = self._store.update_one(
            COLLECTION, product_id, inc={"stock_quantity": quantity}
        )
        return 0 if updated is None else 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _fields_to_raw(changes: dict[str, Any]) -> Document:
        raw: Document = {}
        for key, value in changes.items():
            if key == "price":
                raw["price"] = str(value.amount)
                raw["currency"] = value.currency
            elif key == "discount":
                raw["discount_percentage"] = str(value.value)
            elif key == "category":
                raw["category"] = value.value
            elif key in ("sizes", "colors"):
                raw[key] = list(value)
            else:
                raw[key] = value
        return raw

    @classmethod
    def _to_raw(cls, product: Product) -> Document:
        raw = cls._fields_to_raw({
            "name": product.name,
            "price": product.price,
            "discount": product.discount,
            "stock_quantity": product.stock_quantity,
            "is_active": product.is_active,
            "category": product.category,
            "description": product.description,
            "image": product.image,
            "sizes": product.sizes,
            "colors": product.colors,
        })
        raw["id"] = product.id
        raw["created_at"] = product.created_at.isoformat()
        return raw

    @staticmethod
    def _to_domain(raw: Document) -> Product:
        product = Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock_quantity=raw.get("stock_quantity", 0),
            discount=DiscountPercentage(Decimal(raw.get("discount_percentage", "0"))),
            is_active=raw.get("is_active", True),
            category=ProductCategory(raw.get("category", ProductCategory.GENERAL.value)),
            description=raw.get("description"),
            image=raw.get("image", ""),
            sizes=list(raw.get("sizes", [])),
            colors=list(raw.get("colors", [])),
        )
        if raw.get("created_at"):
            product.created_at = datetime.fromisoformat(raw["created_at"])
        return product
