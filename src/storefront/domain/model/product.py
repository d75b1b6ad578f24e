"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices and discounts change, stock is replenished by admins and drawn
down by checkouts, and products are retired from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import DiscountPercentage, Money

LOW_STOCK_THRESHOLD = 10


class ProductCategory(Enum):
    FEMALE = "Female"
    MALE = "Male"
    KIDS = "Kids"
    GENERAL = "General"


class StockStatus(Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


@dataclass
class Product:
    """A product in the catalog.

    This is an aggregate root. ``stock_quantity`` is only ever lowered
    through the repository's conditional decrement during checkout; the
    setters here serve admin edits, which the repository writes back
    field by field so they never clobber a concurrent decrement.
    """

    id: str | None
    name: str
    price: Money
    stock_quantity: int = 0
    discount: DiscountPercentage = DiscountPercentage()
    is_active: bool = True
    category: ProductCategory = ProductCategory.GENERAL
    description: str | None = None
    image: str = ""
    sizes: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        price: Money,
        image: str,
        stock_quantity: int = 0,
        discount: DiscountPercentage | None = None,
        category: ProductCategory = ProductCategory.GENERAL,
        description: str | None = None,
        sizes: list[str] | None = None,
        colors: list[str] | None = None,
    ) -> Product:
        """Create a new catalog entry, enforcing all invariants."""
        if not name or len(name.strip()) < 2:
            raise ValidationError("Product name must be at least 2 characters")
        _check_image(image)
        _check_stock(stock_quantity)
        return Product(
            id=None,
            name=name.strip(),
            price=price,
            stock_quantity=stock_quantity,
            discount=discount or DiscountPercentage(),
            category=category,
            description=description,
            image=image.strip(),
            sizes=list(sizes or []),
            colors=list(colors or []),
        )

    @property
    def unit_price(self) -> Money:
        """Price a buyer pays for one unit right now."""
        return self.price.apply_discount(self.discount)

    @property
    def stock_status(self) -> StockStatus:
        if self.stock_quantity <= 0:
            return StockStatus.OUT_OF_STOCK
        if self.stock_quantity <= LOW_STOCK_THRESHOLD:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    @property
    def low_stock_count(self) -> int:
        """Units left while stock is low, else 0."""
        return self.stock_quantity if self.stock_status is StockStatus.LOW_STOCK else 0

    def matches_name(self, query: str) -> bool:
        return query.casefold() in self.name.casefold()

    def rename(self, name: str) -> None:
        if not name or len(name.strip()) < 2:
            raise ValidationError("Product name must be at least 2 characters")
        self.name = name.strip()

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price

    def update_discount(self, discount: DiscountPercentage) -> None:
        self.discount = discount

    def update_image(self, image: str) -> None:
        _check_image(image)
        self.image = image.strip()

    def set_stock(self, quantity: int) -> None:
        _check_stock(quantity)
        self.stock_quantity = quantity


def _check_image(image: str) -> None:
    if not image or not image.strip():
        raise ValidationError("Product image is required")


def _check_stock(quantity: int) -> None:
    if not isinstance(quantity, int) or quantity < 0:
        raise ValidationError("Stock quantity must be a non-negative integer")
