"""Port for order lifecycle notifications.

Implementations are fire-and-forget from the caller's point of view:
handlers invoke them only after their own work is committed and never
let a sink failure change the outcome of the operation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class NotificationSink(ABC):

    @abstractmethod
    def order_created(self, order: Order) -> None:
        """A checkout committed."""

    @abstractmethod
    def order_status_changed(self, order: Order) -> None:
        """An admin changed the fulfilment status."""

    @abstractmethod
    def refund_requested(self, order: Order) -> None:
        """The customer asked for a refund."""
