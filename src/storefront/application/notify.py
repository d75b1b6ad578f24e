"""Best-effort delivery of order events to the NotificationSink."""

from __future__ import annotations

import logging
from collections.abc import Callable

from storefront.domain.model.order import Order

logger = logging.getLogger(__name__)


def notify_safely(event: Callable[[Order], None], order: Order) -> None:
    """Invoke a sink method; log and drop any failure."""
    try:
        event(order)
    except Exception:
        logger.exception(
            "Notification %s failed for order %s",
            getattr(event, "__name__", repr(event)),
            order.order_number,
        )
