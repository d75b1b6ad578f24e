"""Application service: catalog queries."""

from __future__ import annotations

from storefront.application.add_product import parse_category
from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository


class ShowProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def list_active(self, category: str | None = None) -> list[ProductDTO]:
        """Active products, newest first, optionally narrowed to one category."""
        return self.search(category=category)

    def search(self, query: str | None = None, category: str | None = None) -> list[ProductDTO]:
        """Active products whose name contains *query*, ignoring case.

        The query is matched as plain text. Newest products come first.
        """
        wanted = parse_category(category) if category else None
        needle = query.strip() if query else ""
        products = [
            p
            for p in self._product_repo.list_all()
            if p.is_active
            and (wanted is None or p.category is wanted)
            and (not needle or p.matches_name(needle))
        ]
        return [ProductDTO.from_product(p) for p in _newest_first(products)]

    def get(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError("Product not found")
        return ProductDTO.from_product(product)


def _newest_first(products: list[Product]) -> list[Product]:
    return sorted(products, key=lambda p: p.created_at, reverse=True)
