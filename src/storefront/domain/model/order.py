"""Orders produced by checkout.

An Order owns its line items and never changes after checkout, apart
from its fulfilment ``status`` (set by admins) and its ``refund_status``
(moved once by the customer from NONE to REQUESTED).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import RefundAlreadyRequestedError, ValidationError
from storefront.domain.model.identity import Principal
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


class RefundStatus(Enum):
    NONE = "None"
    REQUESTED = "Requested"
    APPROVED = "Approved"
    REJECTED = "Rejected"


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the product and its price at order-creation time.

    ``product_id`` is a snapshot reference, not a live pointer; renaming
    or repricing the product later leaves the line item untouched.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # post-discount, locked at checkout

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class ShippingDetails:
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None


MIN_CUSTOMER_NAME_LENGTH = 2
MIN_REFUND_REASON_LENGTH = 5


@dataclass
class Order:
    """A placed order.

    New orders go through ``Order.create()``, which validates; the plain
    constructor is for repositories rebuilding stored orders.
    """

    id: str | None
    order_number: str
    user_id: str | None
    customer_name: str
    customer_email: str
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PROCESSING
    refund_status: RefundStatus = RefundStatus.NONE
    refund_reason: str | None = None
    shipping: ShippingDetails = field(default_factory=ShippingDetails)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        order_number: str,
        customer_name: str,
        customer_email: str,
        items: list[OrderLineItem],
        user_id: str | None = None,
        shipping: ShippingDetails | None = None,
        created_at: datetime | None = None,
    ) -> Order:
        if not customer_name or len(customer_name.strip()) < MIN_CUSTOMER_NAME_LENGTH:
            raise ValidationError(
                f"Customer name must be at least {MIN_CUSTOMER_NAME_LENGTH} characters"
            )
        if not customer_email or "@" not in customer_email:
            raise ValidationError("A valid customer email is required")
        if not items:
            raise ValidationError("Order items are required")

        return Order(
            id=None,
            order_number=order_number,
            user_id=user_id,
            customer_name=customer_name.strip(),
            customer_email=customer_email.strip(),
            items=list(items),
            shipping=shipping or ShippingDetails(),
            created_at=created_at or datetime.now(timezone.utc),
        )

    # --- Refund and status ----------------------------------------------------

    def request_refund(self, reason: str) -> None:
        """Transition refund status NONE -> REQUESTED.

        Ownership is checked by the caller via ``is_owned_by``.
        """
        if self.refund_status is not RefundStatus.NONE:
            raise RefundAlreadyRequestedError("Refund already requested")
        reason = (reason or "").strip()
        if len(reason) < MIN_REFUND_REASON_LENGTH:
            raise ValidationError(
                f"Refund reason must be at least {MIN_REFUND_REASON_LENGTH} characters"
            )
        self.refund_status = RefundStatus.REQUESTED
        self.refund_reason = reason

    def change_status(self, status: OrderStatus) -> None:
        """Set the fulfilment status.

        Any member of OrderStatus is accepted; moving backwards or
        skipping a step is allowed.
        """
        self.status = status

    # --- Queries --------------------------------------------------------------

    def is_owned_by(self, principal: Principal) -> bool:
        if self.user_id is not None and self.user_id == principal.user_id:
            return True
        return self.customer_email == principal.email

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def item_count(self) -> int:
        return len(self.items)
