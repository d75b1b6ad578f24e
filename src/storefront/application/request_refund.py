"""Application service: Request Refund use case.

Only the order's owner (same user id, or same customer email for orders
placed as a guest) may ask, and only once per order.  The store update
is conditional on the refund status still being NONE, so two concurrent
requests cannot both go through.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO
from storefront.application.notify import notify_safely
from storefront.domain.exceptions import (
    AccessDeniedError,
    OrderNotFoundError,
    RefundAlreadyRequestedError,
)
from storefront.domain.model.identity import Principal
from storefront.domain.model.order import RefundStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.notification_sink import NotificationSink

logger = logging.getLogger(__name__)


class RequestRefundHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: NotificationSink,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications

    def handle(self, order_id: str, requester: Principal, reason: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order {order_id} not found")

        if not order.is_owned_by(requester):
            raise AccessDeniedError("Access denied")

        order.request_refund(reason)

        updated = self._order_repo.update_refund(
            order.id,  # type: ignore[arg-type]
            order.refund_status,
            order.refund_reason,
            expected_status=RefundStatus.NONE,
        )
        if updated is None:
            raise RefundAlreadyRequestedError("Refund already requested")

        logger.info(
            "Refund requested for order %s",
            updated.order_number,
            extra={"extra_fields": {"order_number": updated.order_number}},
        )
        notify_safely(self._notifications.refund_requested, updated)
        return OrderDTO.from_order(updated)
