"""Abstract repository for Order aggregate.

Orders are append-only: there is no delete, and only the status and
refund fields can be updated after insert.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus, RefundStatus


class OrderRepository(ABC):

    @abstractmethod
    def insert(self, order: Order) -> Order:
        """Persist a new order and assign its ID.

        Raises DuplicateOrderNumberError if the order number is taken.
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find_by_owner_or_email(self, user_id: str | None, email: str) -> list[Order]:
        """Return orders owned by *user_id* or placed with *email*, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def update_status(self, order_id: str, status: OrderStatus) -> Order | None:
        """Set an order's status. Returns the updated order, or None if missing."""

    @abstractmethod
    def update_refund(
        self,
        order_id: str,
        refund_status: RefundStatus,
        refund_reason: str | None,
        expected_status: RefundStatus | None = None,
    ) -> Order | None:
        """Set refund fields, optionally only while the current refund
        status equals *expected_status*.

        Returns the updated order, or None if it is missing or the
        expected status no longer holds.
        """
