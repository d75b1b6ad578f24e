"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, StockStatus
from storefront.domain.model.value_objects import DiscountPercentage, Money

IMAGE = "https://images.example.com/kaftan.jpg"


class TestProductCreation:

    def test_defaults(self):
        p = Product.create("Silk Kaftan Gown", Money.of("279.99"), IMAGE)
        assert p.id is None
        assert p.stock_quantity == 0
        assert p.discount.is_zero
        assert p.is_active

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError, match="at least 2 characters"):
            Product.create("X", Money.of("1.00"), IMAGE)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            Product.create("Wrap", Money.of("1.00"), IMAGE, stock_quantity=-1)

    def test_image_required(self):
        with pytest.raises(ValidationError, match="image is required"):
            Product.create("Wrap", Money.of("1.00"), "")

    def test_catalog_fields(self):
        p = Product.create(
            "Wrap", Money.of("1.00"), " https://images.example.com/wrap.jpg ",
            sizes=["S"], colors=["Gold"],
        )
        assert p.image == "https://images.example.com/wrap.jpg"
        assert p.sizes == ["S"]
        assert p.colors == ["Gold"]
        assert p.created_at.tzinfo is not None


class TestUnitPrice:

    def test_undiscounted(self):
        p = Product.create("Dress", Money.of("249.99"), IMAGE)
        assert p.unit_price.amount == Decimal("249.99")

    def test_discounted(self):
        p = Product.create("Dress", Money.of("249.99"), IMAGE, discount=DiscountPercentage.of(20))
        assert p.unit_price.amount == Decimal("199.99")

    def test_follows_discount_changes(self):
        p = Product.create("Dress", Money.of("100.00"), IMAGE)
        p.update_discount(DiscountPercentage.of(10))
        assert p.unit_price.amount == Decimal("90.00")


class TestStockStatus:

    @pytest.mark.parametrize(
        "stock, expected",
        [
            (0, StockStatus.OUT_OF_STOCK),
            (1, StockStatus.LOW_STOCK),
            (10, StockStatus.LOW_STOCK),
            (11, StockStatus.IN_STOCK),
        ],
    )
    def test_thresholds(self, stock, expected):
        p = Product.create("Dress", Money.of("1.00"), IMAGE, stock_quantity=stock)
        assert p.stock_status is expected

    @pytest.mark.parametrize("stock, expected", [(0, 0), (4, 4), (10, 10), (11, 0)])
    def test_low_stock_count(self, stock, expected):
        p = Product.create("Dress", Money.of("1.00"), IMAGE, stock_quantity=stock)
        assert p.low_stock_count == expected

    def test_set_stock_rejects_negative(self):
        p = Product.create("Dress", Money.of("1.00"), IMAGE)
        with pytest.raises(ValidationError):
            p.set_stock(-5)
