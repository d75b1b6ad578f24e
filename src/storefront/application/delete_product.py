"""Application service: Delete Product use case.

Past orders are unaffected: their line items carry a snapshot of the
product id, name and price.
"""

from __future__ import annotations

from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        if not self._product_repo.delete(product_id):
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")
