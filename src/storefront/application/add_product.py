"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, ProductCategory
from storefront.domain.model.value_objects import DiscountPercentage, Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str | Decimal,
        image: str,
        stock_quantity: int = 0,
        discount_percentage: str | Decimal | None = None,
        category: str = ProductCategory.GENERAL.value,
        description: str | None = None,
        sizes: list[str] | None = None,
        colors: list[str] | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product.create(
            name=name,
            price=Money.of(price),
            image=image,
            stock_quantity=stock_quantity,
            discount=DiscountPercentage.of(discount_percentage),
            category=parse_category(category),
            description=description,
            sizes=sizes,
            colors=colors,
        )
        self._product_repo.add(product)
        return ProductDTO.from_product(product)


def parse_category(value: str) -> ProductCategory:
    try:
        return ProductCategory(value)
    except ValueError:
        raise ValidationError(f"Invalid category '{value}'")
