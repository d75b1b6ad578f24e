"""Document-store-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from storefront.domain.exceptions import DuplicateOrderNumberError
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    RefundStatus,
    ShippingDetails,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.document_store import (
    Document,
    DocumentStore,
    DuplicateKeyError,
)

COLLECTION = "orders"
UNIQUE_FIELDS = ("order_number",)


class DocumentOrderRepository(OrderRepository):

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # --- OrderRepository interface --------------------------------------------

    def insert(self, order: Order) -> Order:
        try:
            raw = self._store.insert_one(COLLECTION, self._to_raw(order))
        except DuplicateKeyError as exc:
            raise DuplicateOrderNumberError(
                f"Order number {order.order_number} already exists"
            ) from exc
        order.id = raw["id"]
        return order

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._store.find_one(COLLECTION, order_id)
        return self._to_domain(raw) if raw is not None else None

    def find_by_owner_or_email(self, user_id: str | None, email: str) -> list[Order]:
        def matches(doc: Document) -> bool:
            if user_id is not None and doc.get("user_id") == user_id:
                return True
            return doc["customer_email"] == email

        return self._newest_first(self._store.find(COLLECTION, matches))

    def list_all(self) -> list[Order]:
        return self._newest_first(self._store.find(COLLECTION))

    def update_status(self, order_id: str, status: OrderStatus) -> Order | None:
        raw = self._store.update_one(
            COLLECTION, order_id, set_fields={"status": status.value}
        )
        return self._to_domain(raw) if raw is not None else None

    def update_refund(
        self,
        order_id: str,
        refund_status: RefundStatus,
        refund_reason: str | None,
        expected_status: RefundStatus | None = None,
    ) -> Order | None:
        def still_expected(doc: Document) -> bool:
            return expected_status is None or doc["refund_status"] == expected_status.value

        raw = self._store.update_one(
            COLLECTION,
            order_id,
            where=still_expected,
            set_fields={
                "refund_status": refund_status.value,
                "refund_reason": refund_reason,
            },
        )
        return self._to_domain(raw) if raw is not None else None

    # --- Serialization --------------------------------------------------------

    def _newest_first(self, docs: list[Document]) -> list[Order]:
        orders = [self._to_domain(raw) for raw in docs]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    @staticmethod
    def _to_raw(order: Order) -> Document:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "user_id": order.user_id,
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "status": order.status.value,
            "refund_status": order.refund_status.value,
            "refund_reason": order.refund_reason,
            "created_at": order.created_at.isoformat(),
            "shipping_address": order.shipping.address,
            "city": order.shipping.city,
            "postal_code": order.shipping.postal_code,
            "country": order.shipping.country,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: Document) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            user_id=raw.get("user_id"),
            customer_name=raw["customer_name"],
            customer_email=raw["customer_email"],
            items=items,
            status=OrderStatus(raw["status"]),
            refund_status=RefundStatus(raw.get("refund_status", RefundStatus.NONE.value)),
            refund_reason=raw.get("refund_reason"),
            shipping=ShippingDetails(
                address=raw.get("shipping_address"),
                city=raw.get("city"),
                postal_code=raw.get("postal_code"),
                country=raw.get("country"),
            ),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
