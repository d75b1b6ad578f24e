"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI adapters and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.notification import NotificationLog
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one cart line (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class CustomerDetails:
    """Input: who the order is for and where it ships."""

    name: str
    email: str
    shipping_address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    """Output: order summary as shown to customers and admins."""

    id: str
    order_number: str
    customer_name: str
    customer_email: str
    total: Decimal
    status: str
    refund_status: str
    refund_reason: str | None
    date: str  # YYYY-MM-DD
    line_items: list[OrderLineItemDTO]

    @property
    def item_count(self) -> int:
        return len(self.line_items)

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            total=order.total.amount,
            status=order.status.value,
            refund_status=order.refund_status.value,
            refund_reason=order.refund_reason,
            date=order.created_at.strftime("%Y-%m-%d"),
            line_items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    line_total=item.line_total.amount,
                )
                for item in order.items
            ],
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: Decimal
    discount_percentage: Decimal
    unit_price: Decimal
    stock_quantity: int
    stock_status: str
    is_active: bool
    category: str
    description: str | None
    image: str
    sizes: tuple[str, ...]
    colors: tuple[str, ...]
    low_stock_count: int

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            price=product.price.amount,
            discount_percentage=product.discount.value,
            unit_price=product.unit_price.amount,
            stock_quantity=product.stock_quantity,
            stock_status=product.stock_status.value,
            is_active=product.is_active,
            category=product.category.value,
            description=product.description,
            image=product.image,
            sizes=tuple(product.sizes),
            colors=tuple(product.colors),
            low_stock_count=product.low_stock_count,
        )


@dataclass(frozen=True)
class NotificationLogDTO:
    id: str
    type: str
    recipient: str
    subject: str
    timestamp: str  # YYYY-MM-DD HH:MM
    status: str
    order_number: str | None

    @staticmethod
    def from_entry(entry: NotificationLog) -> NotificationLogDTO:
        return NotificationLogDTO(
            id=entry.id,
            type=entry.type.value,
            recipient=entry.recipient,
            subject=entry.subject,
            timestamp=entry.timestamp.strftime("%Y-%m-%d %H:%M"),
            status=entry.status.value,
            order_number=entry.order_number,
        )
