"""Application service: Create Order (checkout) use case.

Converts a cart into a committed order inside a single unit of work:

1. Resolve each cart line to an active Product (fail if not found).
2. Check stock, capture the discounted unit price, and decrement stock
   with a conditional write that only succeeds while stock still covers
   the quantity.  A concurrent checkout that got there first makes the
   write miss, which fails this checkout as out of stock.
3. Insert the order under a freshly generated order number, retrying
   with a new number if the store reports a duplicate.
4. Commit.  Anything that raises before the commit rolls back every
   decrement and the insert together.

The order-created notification is sent only after the commit and can
never fail the checkout.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CustomerDetails, OrderDTO, OrderItemSpec
from storefront.application.notify import notify_safely
from storefront.domain.exceptions import (
    DuplicateOrderNumberError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.model.identity import Principal
from storefront.domain.model.order import Order, OrderLineItem, ShippingDetails
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory
from storefront.domain.service.notification_sink import NotificationSink
from storefront.domain.service.order_numbers import OrderNumberGenerator

logger = logging.getLogger(__name__)

DEFAULT_MAX_ORDER_NUMBER_ATTEMPTS = 5


class CreateOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        order_numbers: OrderNumberGenerator,
        notifications: NotificationSink,
        max_order_number_attempts: int = DEFAULT_MAX_ORDER_NUMBER_ATTEMPTS,
    ) -> None:
        self._uow_factory = uow_factory
        self._order_numbers = order_numbers
        self._notifications = notifications
        self._max_attempts = max_order_number_attempts

    def handle(
        self,
        customer: CustomerDetails,
        item_specs: list[OrderItemSpec],
        principal: Principal | None = None,
    ) -> OrderDTO:
        if not item_specs:
            raise ValidationError("Order items are required")
        quantities = [Quantity(spec.quantity) for spec in item_specs]

        try:
            with self._uow_factory() as uow:
                line_items = [
                    self._reserve_line(uow, spec.product_id, qty)
                    for spec, qty in zip(item_specs, quantities)
                ]
                order = self._insert_order(uow, customer, line_items, principal)
                uow.commit()
        except (InsufficientStockError, ProductNotFoundError) as exc:
            logger.warning("Checkout for %s rolled back: %s", customer.email, exc)
            raise

        logger.info(
            "Order %s created for %s: %d line(s), total %s",
            order.order_number,
            order.customer_email,
            order.item_count,
            order.total,
            extra={"extra_fields": {
                "order_number": order.order_number,
                "total": str(order.total.amount),
            }},
        )
        notify_safely(self._notifications.order_created, order)
        return OrderDTO.from_order(order)

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _reserve_line(uow: UnitOfWork, product_id: str, quantity: Quantity) -> OrderLineItem:
        product = uow.products.get_by_id(product_id)
        if product is None or not product.is_active:
            raise ProductNotFoundError(f"Product not found: '{product_id}'")

        if product.stock_quantity < quantity.value:
            raise InsufficientStockError(
                f"Out of stock: {product.name} "
                f"(need {quantity.value}, have {product.stock_quantity})"
            )

        unit_price = product.unit_price  # <-- price snapshot

        if uow.products.conditional_decrement(product.id, quantity.value) == 0:
            raise InsufficientStockError(f"Out of stock: {product.name}")

        return OrderLineItem(
            product_id=product.id,  # type: ignore[arg-type]
            product_name=product.name,
            quantity=quantity,
            unit_price=unit_price,
        )

    def _insert_order(
        self,
        uow: UnitOfWork,
        customer: CustomerDetails,
        line_items: list[OrderLineItem],
        principal: Principal | None,
    ) -> Order:
        shipping = ShippingDetails(
            address=customer.shipping_address,
            city=customer.city,
            postal_code=customer.postal_code,
            country=customer.country,
        )
        for attempt in range(1, self._max_attempts + 1):
            order = Order.create(
                order_number=self._order_numbers.next_number(),
                customer_name=customer.name,
                customer_email=customer.email,
                items=line_items,
                user_id=principal.user_id if principal else None,
                shipping=shipping,
            )
            try:
                return uow.orders.insert(order)
            except DuplicateOrderNumberError:
                logger.warning(
                    "Order number %s already taken (attempt %d of %d)",
                    order.order_number,
                    attempt,
                    self._max_attempts,
                    extra={"extra_fields": {"order_number": order.order_number}},
                )
        raise DuplicateOrderNumberError(
            f"Could not allocate a unique order number after {self._max_attempts} attempts"
        )
