"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.add_product import AddProductHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.list_notifications import ListNotificationLogsHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.request_refund import RequestRefundHandler
from storefront.application.show_products import ShowProductsHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.repository.notification_repository import (
    NotificationLogRepository,
)
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWorkFactory
from storefront.domain.service.notification_sink import NotificationSink
from storefront.domain.service.order_numbers import (
    OrderNumberGenerator,
    RandomOrderNumberGenerator,
)
from storefront.infrastructure.notifications import LoggingNotificationSink
from storefront.infrastructure.persistence import order_repository as order_docs
from storefront.infrastructure.persistence.document_store import (
    DocumentStore,
    JsonDocumentStore,
    MemoryDocumentStore,
)
from storefront.infrastructure.persistence.notification_repository import (
    DocumentNotificationLogRepository,
)
from storefront.infrastructure.persistence.order_repository import DocumentOrderRepository
from storefront.infrastructure.persistence.product_repository import (
    DocumentProductRepository,
)
from storefront.infrastructure.persistence.unit_of_work import unit_of_work_factory
from storefront.infrastructure.settings import Settings, get_settings

UNIQUE_INDEXES = {order_docs.COLLECTION: order_docs.UNIQUE_FIELDS}


@dataclass
class Container:
    """Everything a request or CLI command needs, built once per process."""

    settings: Settings
    store: DocumentStore
    products: ProductRepository
    orders: OrderRepository
    notification_logs: NotificationLogRepository
    notifications: NotificationSink
    order_numbers: OrderNumberGenerator
    uow_factory: UnitOfWorkFactory

    # --- Handlers -------------------------------------------------------------

    def create_order(self) -> CreateOrderHandler:
        return CreateOrderHandler(
            uow_factory=self.uow_factory,
            order_numbers=self.order_numbers,
            notifications=self.notifications,
            max_order_number_attempts=self.settings.ORDER_NUMBER_MAX_ATTEMPTS,
        )

    def request_refund(self) -> RequestRefundHandler:
        return RequestRefundHandler(self.orders, self.notifications)

    def update_order_status(self) -> UpdateOrderStatusHandler:
        return UpdateOrderStatusHandler(self.orders, self.notifications)

    def list_orders(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.orders)

    def add_product(self) -> AddProductHandler:
        return AddProductHandler(self.products)

    def update_product(self) -> UpdateProductHandler:
        return UpdateProductHandler(self.products)

    def delete_product(self) -> DeleteProductHandler:
        return DeleteProductHandler(self.products)

    def show_products(self) -> ShowProductsHandler:
        return ShowProductsHandler(self.products)

    def list_notifications(self) -> ListNotificationLogsHandler:
        return ListNotificationLogsHandler(self.notification_logs)


def document_store(settings: Settings) -> DocumentStore:
    if settings.STORE_BACKEND == "memory":
        return MemoryDocumentStore(UNIQUE_INDEXES)
    return JsonDocumentStore(settings.DATA_DIR, UNIQUE_INDEXES)


def build_container(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    order_numbers: OrderNumberGenerator | None = None,
    notifications: NotificationSink | None = None,
) -> Container:
    settings = settings or get_settings()
    store = store or document_store(settings)
    notification_logs = DocumentNotificationLogRepository(store)
    return Container(
        settings=settings,
        store=store,
        products=DocumentProductRepository(store),
        orders=DocumentOrderRepository(store),
        notification_logs=notification_logs,
        notifications=notifications or LoggingNotificationSink(notification_logs),
        order_numbers=order_numbers or RandomOrderNumberGenerator(settings.ORDER_NUMBER_PREFIX),
        uow_factory=unit_of_work_factory(store),
    )
