"""Unit of Work: the transactional boundary of one checkout.

Every read and write made through ``uow.products`` and ``uow.orders``
between ``begin()`` and ``commit()`` applies as a whole or not at all.
Used as a context manager, a block that exits without calling
``commit()`` (normally or through an exception) is rolled back::

    with uow_factory() as uow:
        ...
        uow.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType

from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __init__(self) -> None:
        self._active = False

    def __enter__(self) -> UnitOfWork:
        self.begin()
        self._active = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._active:
            self._active = False
            self.rollback()

    def commit(self) -> None:
        self._commit()
        self._active = False

    @abstractmethod
    def begin(self) -> None:
        """Open the transaction and bind ``products`` / ``orders``."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every change since ``begin()`` durable and visible."""

    @abstractmethod
    def rollback(self) -> None:
        """Undo every change since ``begin()``."""


UnitOfWorkFactory = Callable[[], UnitOfWork]
