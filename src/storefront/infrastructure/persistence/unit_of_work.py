"""Unit-of-work strategies over a DocumentStore.

``TransactionalUnitOfWork`` delegates atomicity to the store's own
multi-document transaction.  ``CompensatingUnitOfWork`` is for stores
that have none: every stock decrement is applied immediately as an
atomic single-document write, journaled, and undone in reverse order if
the unit of work is rolled back.

The compensating path only needs to undo stock decrements because the
order insert is the last write of a checkout.
"""

from __future__ import annotations

from typing import Any

from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory
from storefront.infrastructure.logging import get_logger
from storefront.infrastructure.persistence.document_store import DocumentStore, Transaction
from storefront.infrastructure.persistence.order_repository import DocumentOrderRepository
from storefront.infrastructure.persistence.product_repository import (
    DocumentProductRepository,
)

logger = get_logger(__name__)


class TransactionalUnitOfWork(UnitOfWork):

    def __init__(self, store: DocumentStore) -> None:
        super().__init__()
        self._store = store
        self._tx: Transaction | None = None

    def begin(self) -> None:
        self._tx = self._store.begin_transaction()
        self.products = DocumentProductRepository(self._store)
        self.orders = DocumentOrderRepository(self._store)

    def _commit(self) -> None:
        if self._tx is not None:
            self._tx.commit()
            self._tx = None

    def rollback(self) -> None:
        if self._tx is not None:
            self._tx.rollback()
            self._tx = None


class CompensatingUnitOfWork(UnitOfWork):

    def __init__(self, store: DocumentStore) -> None:
        super().__init__()
        self._store = store
        self._journal: list[tuple[str, int]] = []

    def begin(self) -> None:
        self._journal = []
        self.products = _JournalingProductRepository(
            DocumentProductRepository(self._store), self._journal
        )
        self.orders = DocumentOrderRepository(self._store)

    def _commit(self) -> None:
        self._journal.clear()

    def rollback(self) -> None:
        inner = DocumentProductRepository(self._store)
        failed = 0
        for product_id, quantity in reversed(self._journal):
            try:
                if inner.increment_stock(product_id, quantity) == 0:
                    failed += 1
                    logger.error(
                        "Compensation skipped: product %s vanished before %d units were restored",
                        product_id,
                        quantity,
                    )
            except Exception:
                failed += 1
                logger.exception(
                    "Compensation failed: could not restore %d units of product %s",
                    quantity,
                    product_id,
                )
        if self._journal:
            logger.warning(
                "Rolled back %d stock decrement(s), %d failed",
                len(self._journal),
                failed,
            )
        self._journal.clear()


class _JournalingProductRepository(ProductRepository):
    """Records every successful decrement so it can be compensated."""

    def __init__(self, inner: ProductRepository, journal: list[tuple[str, int]]) -> None:
        self._inner = inner
        self._journal = journal

    def get_by_id(self, product_id: str) -> Product | None:
        return self._inner.get_by_id(product_id)

    def list_all(self) -> list[Product]:
        return self._inner.list_all()

    def add(self, product: Product) -> Product:
        return self._inner.add(product)

    def update_fields(self, product_id: str, **changes: Any) -> Product | None:
        return self._inner.update_fields(product_id, **changes)

    def delete(self, product_id: str) -> bool:
        return self._inner.delete(product_id)

    def conditional_decrement(self, product_id: str, quantity: int) -> int:
        affected = self._inner.conditional_decrement(product_id, quantity)
        if affected:
            self._journal.append((product_id, quantity))
        return affected

    def increment_stock(self, product_id: str, quantity: int) -> int:
        return self._inner.increment_stock(product_id, quantity)


def unit_of_work_factory(store: DocumentStore) -> UnitOfWorkFactory:
    """Pick the strategy the store can support."""
    if store.supports_transactions:
        return lambda: TransactionalUnitOfWork(store)
    return lambda: CompensatingUnitOfWork(store)
