"""Application service: order history queries."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.model.identity import Principal
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def for_user(self, principal: Principal) -> list[OrderDTO]:
        """Orders owned by the principal or placed with their email, newest first."""
        orders = self._order_repo.find_by_owner_or_email(principal.user_id, principal.email)
        return [OrderDTO.from_order(o) for o in orders]

    def list_all(self) -> list[OrderDTO]:
        """Every order, newest first. Admin only."""
        return [OrderDTO.from_order(o) for o in self._order_repo.list_all()]
