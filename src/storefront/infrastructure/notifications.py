"""NotificationSink that records log entries instead of sending mail."""

from __future__ import annotations

import secrets
import string

from storefront.domain.model.notification import NotificationLog, NotificationStatus
from storefront.domain.model.order import Order
from storefront.domain.repository.notification_repository import (
    NotificationLogRepository,
)
from storefront.domain.service.notification_sink import NotificationSink
from storefront.infrastructure.logging import get_logger

logger = get_logger(__name__)

_ID_ALPHABET = string.digits + string.ascii_uppercase


class LoggingNotificationSink(NotificationSink):

    def __init__(self, log_repo: NotificationLogRepository) -> None:
        self._log_repo = log_repo

    def order_created(self, order: Order) -> None:
        self._record(order, f"Order Confirmation - {order.order_number}", NotificationStatus.SENT)

    def order_status_changed(self, order: Order) -> None:
        subject = f"Order Status Update - {order.order_number} ({order.status.value})"
        self._record(order, subject, NotificationStatus.SENT)

    def refund_requested(self, order: Order) -> None:
        self._record(order, f"Refund Requested - {order.order_number}", NotificationStatus.PENDING)

    def _record(self, order: Order, subject: str, status: NotificationStatus) -> None:
        entry = NotificationLog(
            id=_new_log_id(),
            recipient=order.customer_email,
            subject=subject,
            status=status,
            order_number=order.order_number,
        )
        self._log_repo.add(entry)
        logger.info("Notification to %s: %s [%s]", entry.recipient, subject, status.value)


def _new_log_id() -> str:
    return "notif-" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(6))
