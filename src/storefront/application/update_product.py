"""Application service: Update Product use case."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from storefront.application.add_product import parse_category
from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.model.value_objects import DiscountPercentage, Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | Decimal | None = None,
        discount_percentage: str | Decimal | None = None,
        stock_quantity: int | None = None,
        category: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
        image: str | None = None,
        sizes: list[str] | None = None,
        colors: list[str] | None = None,
    ) -> ProductDTO:
        """Apply the given field changes to a product.

        Only the supplied fields are written, so a checkout that draws
        stock down in the meantime is not undone. Price and discount
        changes do NOT affect any existing orders; they captured a price
        snapshot at creation time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        # run the domain checks on the loaded copy, then write just the deltas
        changes: dict[str, Any] = {}
        if name is not None:
            product.rename(name)
            changes["name"] = product.name
        if price is not None:
            product.update_price(Money.of(price))
            changes["price"] = product.price
        if discount_percentage is not None:
            product.update_discount(DiscountPercentage.of(discount_percentage))
            changes["discount"] = product.discount
        if stock_quantity is not None:
            product.set_stock(stock_quantity)
            changes["stock_quantity"] = product.stock_quantity
        if category is not None:
            changes["category"] = parse_category(category)
        if description is not None:
            changes["description"] = description
        if is_active is not None:
            changes["is_active"] = is_active
        if image is not None:
            product.update_image(image)
            changes["image"] = product.image
        if sizes is not None:
            changes["sizes"] = list(sizes)
        if colors is not None:
            changes["colors"] = list(colors)

        updated = self._product_repo.update_fields(product_id, **changes)
        if updated is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_product(updated)
