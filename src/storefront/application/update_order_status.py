"""Application service: Update Order Status use case (admin).

The caller is expected to have checked the admin capability already.
No ordering is enforced between statuses.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO
from storefront.application.notify import notify_safely
from storefront.domain.exceptions import OrderNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.notification_sink import NotificationSink

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: NotificationSink,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications

    def handle(self, order_id: str, status: OrderStatus | str) -> OrderDTO:
        new_status = _parse_status(status)

        order = self._order_repo.update_status(order_id, new_status)
        if order is None:
            raise OrderNotFoundError(f"Order {order_id} not found")

        logger.info(
            "Order %s status set to %s",
            order.order_number,
            new_status.value,
            extra={"extra_fields": {"order_number": order.order_number, "status": new_status.value}},
        )
        notify_safely(self._notifications.order_status_changed, order)
        return OrderDTO.from_order(order)


def _parse_status(status: OrderStatus | str) -> OrderStatus:
    if isinstance(status, OrderStatus):
        return status
    try:
        return OrderStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid status '{status}'. Expected one of: {allowed}")
