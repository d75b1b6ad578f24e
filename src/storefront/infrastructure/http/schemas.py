"""Pydantic schemas for the HTTP API (camelCase on the wire)."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from storefront.application.dto import (
    CustomerDetails,
    NotificationLogDTO,
    OrderDTO,
    OrderItemSpec,
    ProductDTO,
)
from storefront.domain.model.order import MIN_REFUND_REASON_LENGTH, OrderStatus
from storefront.domain.model.product import ProductCategory


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# ORDER SCHEMAS
# ============================================================================


class CreateOrderItem(ApiModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class CreateOrderRequest(ApiModel):
    customer_name: str = Field(..., min_length=2)
    customer_email: EmailStr
    items: list[CreateOrderItem]
    shipping_address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    def customer(self) -> CustomerDetails:
        return CustomerDetails(
            name=self.customer_name,
            email=str(self.customer_email),
            shipping_address=self.shipping_address,
            city=self.city,
            postal_code=self.postal_code,
            country=self.country,
        )

    def item_specs(self) -> list[OrderItemSpec]:
        return [OrderItemSpec(i.product_id, i.quantity) for i in self.items]


class RequestRefundRequest(ApiModel):
    refund_reason: str = Field(..., min_length=MIN_REFUND_REASON_LENGTH)


class UpdateOrderStatusRequest(ApiModel):
    status: OrderStatus


class OrderResponse(ApiModel):
    id: str
    order_number: str
    customer_name: str
    customer_email: str
    total: float
    status: str
    refund_status: str
    refund_reason: Optional[str] = None
    date: str
    items: int

    @classmethod
    def from_dto(cls, dto: OrderDTO) -> "OrderResponse":
        return cls(
            id=dto.id,
            order_number=dto.order_number,
            customer_name=dto.customer_name,
            customer_email=dto.customer_email,
            total=float(dto.total),
            status=dto.status,
            refund_status=dto.refund_status,
            refund_reason=dto.refund_reason,
            date=dto.date,
            items=dto.item_count,
        )


# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================


class CreateProductRequest(ApiModel):
    name: str = Field(..., min_length=2)
    price: Decimal = Field(..., ge=0)
    image: str = Field(..., min_length=1)
    stock_quantity: int = Field(..., ge=0)
    discount_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    category: ProductCategory = ProductCategory.GENERAL
    description: Optional[str] = None
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)


class UpdateProductRequest(ApiModel):
    name: Optional[str] = Field(None, min_length=2)
    price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    discount_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    category: Optional[ProductCategory] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    image: Optional[str] = Field(None, min_length=1)
    sizes: Optional[list[str]] = None
    colors: Optional[list[str]] = None


class ProductResponse(ApiModel):
    id: str
    name: str
    price: float
    discount_percentage: float
    final_price: float
    stock_quantity: int
    stock_status: str
    low_stock: bool
    low_stock_count: int
    is_active: bool
    category: str
    description: Optional[str] = None
    image: str
    sizes: list[str]
    colors: list[str]

    @classmethod
    def from_dto(cls, dto: ProductDTO) -> "ProductResponse":
        return cls(
            id=dto.id,
            name=dto.name,
            price=float(dto.price),
            discount_percentage=float(dto.discount_percentage),
            final_price=float(dto.unit_price),
            stock_quantity=dto.stock_quantity,
            stock_status=dto.stock_status,
            low_stock=dto.stock_status == "low_stock",
            low_stock_count=dto.low_stock_count,
            is_active=dto.is_active,
            category=dto.category,
            description=dto.description,
            image=dto.image,
            sizes=list(dto.sizes),
            colors=list(dto.colors),
        )


# ============================================================================
# NOTIFICATION SCHEMAS
# ============================================================================


class NotificationLogResponse(ApiModel):
    id: str
    type: str
    recipient: str
    subject: str
    timestamp: str
    status: str
    order_number: Optional[str] = None

    @classmethod
    def from_dto(cls, dto: NotificationLogDTO) -> "NotificationLogResponse":
        return cls(**vars(dto))
